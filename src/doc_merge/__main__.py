"""Allow ``python -m doc_merge``."""

from doc_merge.cli import main

raise SystemExit(main())
