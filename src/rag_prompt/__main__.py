"""Allow ``python -m rag_prompt``."""

import sys

from rag_prompt.cli import main

sys.exit(main())
