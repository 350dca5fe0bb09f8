"""Request body decompression middleware."""

import gzip
import zlib

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class GzipRequestMiddleware:
    """Inflate request bodies sent with Content-Encoding: gzip.
    
    Response compression is handled separately by Starlette's GZipMiddleware.
    """
    
    def __init__(self, app: ASGIApp):
        self.app = app
    
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        
        headers = Headers(scope=scope)
        if "gzip" not in headers.get("content-encoding", "").lower():
            await self.app(scope, receive, send)
            return
        
        chunks = []
        more_body = True
        while more_body:
            message = await receive()
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)
        
        try:
            body = gzip.decompress(b"".join(chunks))
        except (OSError, EOFError, zlib.error):
            response = PlainTextResponse("Invalid gzip body", status_code=400)
            await response(scope, receive, send)
            return
        
        mutable = MutableHeaders(scope=scope)
        del mutable["content-encoding"]
        mutable["content-length"] = str(len(body))
        
        sent = False
        
        async def receive_body() -> Message:
            nonlocal sent
            if sent:
                return await receive()
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        
        await self.app(scope, receive_body, send)
