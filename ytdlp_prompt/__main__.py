import sys

from ytdlp_prompt.cli import main

sys.exit(main())
