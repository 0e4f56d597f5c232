"""Console entry point for the LESS Language Server."""

from pygls.cli import start_server

from lessgoto.server import server


def main() -> None:
    """Start the LESS language server (stdio by default, see --help)."""
    start_server(server)


if __name__ == "__main__":
    main()
