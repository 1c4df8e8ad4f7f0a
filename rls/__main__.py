from __future__ import annotations

from rls.cli.app import main

if __name__ == "__main__":
    main()
