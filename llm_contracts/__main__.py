import sys

from llm_contracts.cli.main import main

sys.exit(main())
