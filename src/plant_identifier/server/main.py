"""Main entry point for the plant identification server.

Configured as the `plant-identifier-server` script in pyproject.toml. The
application is built by `create_app` when uvicorn starts, so configuration is
read from PLANT_IDENTIFIER_CONFIG at that point.
"""

import argparse

import uvicorn


def main() -> None:
    """Start the identification server using uvicorn.

    Configuration:
        - host: "0.0.0.0" - Binds to all network interfaces
        - port: Configurable via --port argument (default: 8000)
    """
    parser = argparse.ArgumentParser(description="Start the plant identification server")
    parser.add_argument(
        "--port", type=int, default=8000, help="Port to run the server on (default: 8000)"
    )
    args = parser.parse_args()

    uvicorn.run(
        "plant_identifier.server.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=args.port,
    )


if __name__ == "__main__":
    main()
