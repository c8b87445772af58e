"""HTTP front end serving cached avatars.

Two routes mirror the historical entry points:

* ``GET /avatar?t=Tiger-222``: colour and letter both come from ``t``.
* ``GET /avatar/ip?l=T``: colour comes from the caller's address, the letter
  from ``l``.

Run with ``uvicorn grid_avatar.service:app`` or ``python -m grid_avatar serve``.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request, Response
from loguru import logger

from grid_avatar.avatar import get_or_create
from grid_avatar.cache import AvatarStore, FileStore
from grid_avatar.config import (
    DEFAULT_SIDE_LENGTH,
    AvatarConfig,
    cache_dir_from_env,
    config_from_env,
)
from grid_avatar.errors import ConfigurationError, ResourceError

PNG_MEDIA_TYPE = "image/png"
DEFAULT_TEXT = "*"
DEFAULT_LETTER = "T"
CACHE_CONTROL = "public, max-age=86400"


def create_app(
    store: Optional[AvatarStore] = None, config: Optional[AvatarConfig] = None
) -> FastAPI:
    app = FastAPI(title="grid-avatar")
    app.state.store = store if store is not None else FileStore(cache_dir_from_env())
    app.state.config = config if config is not None else config_from_env()

    def serve(request: Request, key: str, letter_source: str, size: int) -> Response:
        try:
            data, cache_key = get_or_create(
                request.app.state.store,
                key,
                letter_source,
                side_length=size,
                config=request.app.state.config,
            )
        except ConfigurationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ResourceError as e:
            logger.error("Avatar rendering failed: {}", e)
            raise HTTPException(status_code=500, detail="Avatar unavailable")
        return Response(
            content=data,
            media_type=PNG_MEDIA_TYPE,
            headers={"Cache-Control": CACHE_CONTROL, "ETag": f'"{cache_key}"'},
        )

    @app.get("/avatar")
    def avatar_from_text(
        request: Request,
        t: str = Query(DEFAULT_TEXT),
        size: int = Query(DEFAULT_SIDE_LENGTH),
    ) -> Response:
        return serve(request, t, t, size)

    @app.get("/avatar/ip")
    def avatar_from_address(
        request: Request,
        l: str = Query(DEFAULT_LETTER),  # noqa: E741
        size: int = Query(DEFAULT_SIDE_LENGTH),
    ) -> Response:
        address = request.client.host if request.client else "127.0.0.1"
        return serve(request, address, l, size)

    return app


app = create_app()
