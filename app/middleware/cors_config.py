import os
from fastapi.middleware.cors import CORSMiddleware

def configure_cors(app):
    # storefront widgets call us cross-origin; list the shop origins in CORS_ORIGINS
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
    if not origins:
        origins = ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Shopify-Shop-Domain"],
        max_age=86400,
    )
