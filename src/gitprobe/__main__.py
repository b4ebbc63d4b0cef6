"""Allow ``python -m gitprobe`` to start the MCP stdio server."""

from gitprobe.server import main

if __name__ == "__main__":
    main()
