"""Per-request context resolved from headers.

Authentication happens upstream; the auth layer asserts the user through
``X-User-Id``. Carts are keyed by the client's ``X-Session-Id``.
"""

from fastapi import Header, HTTPException

from storefront.identity.role import is_admin


async def current_user_id(x_user_id: str = Header(default="")) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


async def admin_user_id(x_user_id: str = Header(default="")) -> str:
    user_id = await current_user_id(x_user_id)
    if not is_admin(user_id):
        raise HTTPException(status_code=403, detail="Administrator role required")
    return user_id


async def cart_session_id(x_session_id: str = Header(default="")) -> str:
    if not x_session_id:
        raise HTTPException(status_code=400, detail="X-Session-Id header is required")
    return x_session_id
