"""Central configuration for paths and constants."""

import os
from pathlib import Path

# Directories — override with CHATS2MD_INPUT_DIR / CHATS2MD_OUTPUT_DIR env vars
INPUT_DIR = Path(os.environ.get("CHATS2MD_INPUT_DIR", "input"))
OUTPUT_DIR = Path(os.environ.get("CHATS2MD_OUTPUT_DIR", "output"))

# File naming
MAX_NAME_LENGTH = int(os.environ.get("CHATS2MD_MAX_NAME_LENGTH", "50"))
PLACEHOLDER_NAME = "unnamed_chat"
MARKDOWN_SUFFIX = ".md"

# Source formats
FORMAT_A = "formatA"
FORMAT_B = "formatB"
SUPPORTED_FORMATS = (FORMAT_A, FORMAT_B)
INPUT_SUFFIXES = {".json", ".zip"}

# Source role values folded into "user"
USER_ROLE_ALIASES = {"human"}

# Rendered in place of a session that has no messages at all
EMPTY_SESSION_PLACEHOLDER = "{no messages}"
