"""slashport: batch conversion of Discord.js prefix commands to slash commands.

The package walks a directory of command files, sends each file to an
OpenAI-compatible chat-completion API with a fixed conversion instruction and
writes the reply to a mirrored output directory.

Package Structure
-----------------
- `pipeline/converter/`:
    Configuration, completion client, text transforms, file handling, the
    sequential conversion driver and the CLI entrypoint.
- `ui.py`: Rich terminal output (banner, per-file status, summary).
- `config.py`: All default values and constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> # In shell
>>> slashport --source commands/PrefixCommands --output commands/SlashCommands
"""

__version__ = "0.1.0"
