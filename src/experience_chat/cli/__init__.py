"""
CLI module - terminal front-end.

Provides entry points for:
- Asking a single question
- Interactive chat
- The retrieval quality eval
"""

from experience_chat.cli.commands import (
    main,
    run_ask_cli,
    run_chat_cli,
    run_eval_cli,
)

__all__ = [
    "main",
    "run_ask_cli",
    "run_chat_cli",
    "run_eval_cli",
]
