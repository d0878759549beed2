"""
Metadata rewrite middleware.

On board page loads (``/?g=<id>``) the social preview tags of the HTML
page are pointed at the board's own image and canonical URL.
"""
from typing import List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response, StreamingResponse
from starlette.types import ASGIApp

from ..utils.debug import print_step
from ..utils.html_rewriter import AttributeRewriteRule, HTMLAttributeRewriter
from ..utils.validation import is_valid_board_id, request_origin

PAGE_PATHS = frozenset({"/", "/index.html"})

# Describe the upstream file, not the rewritten body.
STALE_RESPONSE_HEADERS = frozenset({b"content-length", b"etag", b"last-modified"})
CONDITIONAL_REQUEST_HEADERS = frozenset({b"if-none-match", b"if-modified-since"})


def board_rewrite_rules(image_url: str, page_url: str) -> List[AttributeRewriteRule]:
    return [
        AttributeRewriteRule("meta", "property", "og:image", "content", image_url),
        AttributeRewriteRule("meta", "property", "og:url", "content", page_url),
        AttributeRewriteRule("meta", "name", "twitter:image", "content", image_url),
        AttributeRewriteRule("link", "rel", "canonical", "href", page_url, token_match=True),
    ]


class MetaRewriteMiddleware(BaseHTTPMiddleware):
    """
    Rewrites og:image, og:url, twitter:image and the canonical link of
    board pages. Any other request passes through untouched.
    """

    def __init__(self, app: ASGIApp, public_origin: Optional[str] = None):
        super().__init__(app)
        self.public_origin = public_origin

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        board_id = request.query_params.get("g")
        if not is_valid_board_id(board_id):
            return await call_next(request)

        if request.url.path not in PAGE_PATHS:
            return await call_next(request)

        # Board pages are always fetched in full from upstream.
        request.scope["headers"] = [
            (key, value) for key, value in request.scope["headers"] if key.lower() not in CONDITIONAL_REQUEST_HEADERS
        ]
        response = await call_next(request)
        content_type = response.headers.get("content-type", "")
        if "text/html" not in content_type.lower():
            return response

        origin = request_origin(request.url, self.public_origin)
        image_url = f"{origin}/og?g={board_id}"
        page_url = f"{origin}?g={board_id}"

        print_step("Meta Rewrite", {
            "path": request.url.path,
            "image_url": image_url,
            "page_url": page_url
        }, "input")

        rewriter = HTMLAttributeRewriter(board_rewrite_rules(image_url, page_url))
        rewritten = StreamingResponse(
            rewriter.transform(response.body_iterator),
            status_code=response.status_code,
            background=response.background,
        )
        rewritten.raw_headers = [
            (key, value) for key, value in response.raw_headers if key.lower() not in STALE_RESPONSE_HEADERS
        ]
        return rewritten
