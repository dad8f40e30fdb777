"""HTTP plumbing shared by every router: request identity and error mapping."""
