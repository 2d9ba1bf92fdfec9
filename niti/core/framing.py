from __future__ import annotations


def frame_inbound(raw: str, line_mode: bool) -> str:
    """
    Shape a raw chunk read from the device before it is appended to the
    receive buffer.

    In line mode the chunk is split on newlines, each line is stripped and
    blank lines are dropped; the survivors are joined back with ``\\n``.
    Otherwise the chunk is returned unchanged.
    """
    if not line_mode:
        return raw
    lines = (line.strip() for line in raw.split("\n"))
    return "\n".join(line for line in lines if line)
