"""Global configuration constants for the project.

Defines default paths, completion parameters and the conversion prompt used
across the converter pipeline and its CLI.
"""

from __future__ import annotations

from pathlib import Path

# Source/destination defaults (relative to the working directory)
DEFAULT_SOURCE_DIR: Path = Path("commands") / "PrefixCommands"
DEFAULT_OUTPUT_DIR: Path = Path("commands") / "SlashCommands"
DEFAULT_EXTENSION: str = ".js"

# Completion service defaults
DEFAULT_BASE_URL: str = "https://api.openai.com/v1"
DEFAULT_MODEL: str = "gpt-5"
DEFAULT_TEMPERATURE: float = 0.3
DEFAULT_MAX_TOKENS: int = 2000
DEFAULT_REQUEST_TIMEOUT: int = 300
CHAT_COMPLETIONS_PATH: str = "/chat/completions"

# Content budget (characters) and throttle between requests (milliseconds)
DEFAULT_MAX_CONTENT_SIZE: int = 20000
DEFAULT_DELAY_MS: int = 1000

# Prompt sent with every file
SYSTEM_PROMPT: str = (
    "Convert this Discord.js prefix command to a slash command. "
    "Use SlashCommandBuilder, replace message with interaction, use "
    "interaction.reply() and interaction.options.get(). "
    "Output only the JavaScript code."
)
USER_PROMPT_PREFIX: str = "Convert to slash command:\n\n"

# Dotenv file looked up in the working directory
ENV_FILENAME: str = ".env"

# Logging
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL: str = "INFO"

# Exit codes
EXIT_OK: int = 0
EXIT_FATAL: int = 1
EXIT_INTERRUPTED: int = 130
