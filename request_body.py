"""
Request body parsing shared by the create and update routes.

JSON bodies are used as-is. Urlencoded and multipart forms are flattened
into a dict: repeated fields become lists and uploaded files are dropped.
Anything else reads as an empty body.
"""

from fastapi import Request
from starlette.datastructures import UploadFile

FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def read_body(request: Request):
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith("application/json"):
        if not await request.body():
            return {}
        # malformed JSON is left to the catch-all handler
        return await request.json()

    if content_type.startswith(FORM_TYPES):
        form = await request.form()
        body = {}
        for key in form.keys():
            values = [v for v in form.getlist(key) if not isinstance(v, UploadFile)]
            if not values:
                continue
            body[key] = values[0] if len(values) == 1 else values
        return body

    return {}
