from fastapi import Request

def add_security_headers(app):
    @app.middleware("http")
    async def security_headers_mw(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        # review payloads are data, never pages
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        return response
