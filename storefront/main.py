"""
Module principal de l'application FastAPI de la boutique.

Configure le logging, les middlewares (CORS), le format d'erreur `{"error": ...}`
et inclut les routeurs produits, panier et commandes sous le préfixe d'API.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.cart.router import cart_router
from storefront.config import settings
from storefront.orders.router import order_router
from storefront.products.router import admin_product_router, product_router

# Configurer le logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Storefront API",
    description="API boutique: catalogue, panier persistant et passage de commande.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Range"],
)


# ======================================================
# Format d'erreur
# ======================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        # Le premier élément de loc est la source (body, query, path)
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Valeur invalide")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Requête invalide"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Requête invalide sur {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _format_validation_errors(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Erreur non gérée sur {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Erreur interne du serveur"},
    )


# ======================================================
# Inclure les routeurs
# ======================================================
app.include_router(product_router, prefix=settings.API_PREFIX)
app.include_router(admin_product_router, prefix=settings.API_PREFIX)
app.include_router(cart_router, prefix=settings.API_PREFIX)
app.include_router(order_router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
async def health_check():
    return {"status": "OK"}
