"""Allow ``python -m vcodegen``."""

from vcodegen.main import main

raise SystemExit(main())
