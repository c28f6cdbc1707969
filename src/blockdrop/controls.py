"""Keyboard bindings for the front-ends."""

from __future__ import annotations

from typing import Dict, Optional

from .engine import Command

# Key names as reported by ``pygame.key.name``.
KEY_BINDINGS: Dict[str, Command] = {
    "left": Command.MOVE_LEFT,
    "right": Command.MOVE_RIGHT,
    "down": Command.SOFT_DROP,
    "up": Command.ROTATE,
    "space": Command.MIRROR,
    "return": Command.RESET,
    "enter": Command.RESET,
}


def command_for_key(name: str) -> Optional[Command]:
    """Return the command bound to key ``name`` or ``None`` if unbound."""

    return KEY_BINDINGS.get(name.lower())
