from __future__ import annotations

from typing import Dict, Optional

from gameplay_models import Direction


def _build_default_key_map() -> Dict[str, Direction]:
    """
    Default key names for the four directions.

    Accepted keys (case-insensitive):
      - WASD keys: W, A, S, D
      - Arrow keys as browser style names: ArrowUp, ArrowDown, ArrowLeft, ArrowRight
      - Bare direction names: Up, Down, Left, Right
    """
    key_map: Dict[str, Direction] = {
        "w": Direction.UP,
        "a": Direction.LEFT,
        "s": Direction.DOWN,
        "d": Direction.RIGHT,
    }
    for direction in Direction:
        key_map[direction.value] = direction
        key_map["arrow" + direction.value] = direction
    return key_map


DEFAULT_KEY_MAP: Dict[str, Direction] = _build_default_key_map()


def decode_key(key_name: str, key_map: Optional[Dict[str, Direction]] = None) -> Optional[Direction]:
    """Return the Direction for a raw key name, or None for keys that are not gameplay keys."""
    normalized_name = (key_name or "").strip().lower()
    if not normalized_name:
        return None
    return (key_map if key_map is not None else DEFAULT_KEY_MAP).get(normalized_name)


def _run_unit_tests() -> None:
    assert decode_key("w") == Direction.UP
    assert decode_key("A") == Direction.LEFT
    assert decode_key("ArrowDown") == Direction.DOWN
    assert decode_key("RIGHT") == Direction.RIGHT
    assert decode_key("q") is None
    assert decode_key("") is None


if __name__ == "__main__":
    _run_unit_tests()
    print("key_decoder.py: ok")
