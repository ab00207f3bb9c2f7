"""HTTP routes of the guitar store API."""

import logging

from fastapi import APIRouter, Request, Response

from ...pipeline import StorePipelines

logger = logging.getLogger(__name__)


def create_guitar_router(pipelines: StorePipelines, prefix: str = "/guitar") -> APIRouter:
    """
    Build the store router around a set of endpoint pipelines.

    Routes:
    - GET  {prefix}/product/{productid} → one-element JSON array
    - GET  {prefix}/faq                → JSON array of {q, a}
    - GET  {prefix}/{category}         → JSON array of products ("all" lists everything)
    - POST {prefix}/diy                → confirmation text
    - POST {prefix}/feedback           → confirmation text

    Errors are always plain text with status 400 or 500.
    """
    router = APIRouter(prefix=prefix, tags=["guitar"])

    @router.get("/product/{productid}")
    async def get_product(productid: str) -> Response:
        return await pipelines.product.handle(productid)

    # Registered before /{category} so "faq" is not read as a category
    @router.get("/faq")
    async def get_faq() -> Response:
        return await pipelines.faq.handle()

    @router.get("/{category}")
    async def get_category(category: str) -> Response:
        return await pipelines.category.handle(category)

    @router.post("/diy")
    async def post_diy(request: Request) -> Response:
        form = await request.form()
        return await pipelines.diy.handle(form)

    @router.post("/feedback")
    async def post_feedback(request: Request) -> Response:
        form = await request.form()
        return await pipelines.feedback.handle(form)

    return router
