"""Command line entry point.

    python -m grid_avatar render Tiger-222 --out tiger.png
    python -m grid_avatar render 10.0.0.1 --letter T --cache-dir avatars
    python -m grid_avatar serve --port 8000
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from grid_avatar.avatar import generate_avatar, get_or_create
from grid_avatar.cache import FileStore
from grid_avatar.config import DEFAULT_SIDE_LENGTH, cache_dir_from_env, config_from_env
from grid_avatar.errors import AvatarError

DEFAULT_TEXT = "Tiger-222"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="grid_avatar", description="Generate letter identicons."
    )
    sub = p.add_subparsers(dest="command", required=True)

    r = sub.add_parser("render", help="Render one avatar to a PNG file")
    r.add_argument(
        "text", nargs="?", default=DEFAULT_TEXT, help="Key the colour is derived from"
    )
    r.add_argument("--letter", help="Letter source (defaults to the key itself)")
    r.add_argument("--size", type=_positive_int, default=DEFAULT_SIDE_LENGTH)
    r.add_argument("--scale", type=float, help="Gradient step multiplier")
    r.add_argument("--out", help="Output file (defaults to <cache key>.png)")
    r.add_argument("--cache-dir", help="Reuse and fill this avatar cache directory")

    s = sub.add_parser("serve", help="Serve avatars over HTTP")
    s.add_argument("--host", default="127.0.0.1")
    s.add_argument("--port", type=_positive_int, default=8000)
    s.add_argument("--cache-dir", default=cache_dir_from_env())
    return p


def run_render(args: argparse.Namespace) -> str:
    letter = args.letter if args.letter is not None else args.text
    config = (
        config_from_env(gradient_scale=args.scale)
        if args.scale is not None
        else config_from_env()
    )
    if args.cache_dir:
        data, key = get_or_create(
            FileStore(args.cache_dir), args.text, letter, args.size, config
        )
    else:
        data, key = generate_avatar(args.text, letter, args.size, config)
    out = args.out or f"{key}.png"
    with open(out, "wb") as f:
        f.write(data)
    logger.info("Wrote {} ({} bytes)", out, len(data))
    return out


def run_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from grid_avatar.service import create_app

    app = create_app(store=FileStore(args.cache_dir), config=config_from_env())
    uvicorn.run(app, host=args.host, port=args.port)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.command == "render":
            print(run_render(args))
        else:
            run_serve(args)
    except AvatarError as e:
        logger.error("{}", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
