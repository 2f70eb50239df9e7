"""Run the DesiBasket mock API with uvicorn.

Usage:
    python -m storefront.server                  # 127.0.0.1:8000
    python -m storefront.server --port 9000 --reload
"""

import argparse

import uvicorn


def main(argv=None):
    parser = argparse.ArgumentParser(description="DesiBasket mock API server")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args(argv)

    uvicorn.run("storefront.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
