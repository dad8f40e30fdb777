"""Query limits shared by repository listings."""

# Upper bound for unpaginated back-office and catalogue listings
LISTING_LIMIT = 1000
