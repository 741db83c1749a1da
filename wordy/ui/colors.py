"""Theme colors and cell coloring for the board."""

from wordy.core.puzzle import CellStatus


class WordyColors:
    """Dark teal palette of the game board."""

    BG = "#1C3B4F"
    ACCENT = "#4A7E8E"
    ACCENT_PRESSED = "#3A6A7A"

    TEXT_LIGHT = "#E1E2E1"
    TEXT_MUTED = "#858882"
    TEXT_DARK = "#1C3B4F"

    CELL = "#E1E2E1"
    CELL_SELECTED = "#FFD700"
    CELL_CORRECT = "#4CAF50"
    CELL_INCORRECT = "#FF6B6B"
    CELL_HINT = "#ADD8E6"

    REMINDER_BG = "rgba(74, 126, 142, 0.95)"
    REMINDER_BORDER = "rgba(255, 215, 0, 0.6)"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def cell_color(status: CellStatus, solved: bool = False, selected: bool = False) -> str:
    """Background color of one answer cell.

    Solved clues are green throughout. A selected incorrect cell mixes both
    colors so the cursor stays visible while the wrong letters are shown.
    """
    if solved:
        return WordyColors.CELL_CORRECT
    if status is CellStatus.INCORRECT:
        if selected:
            return blend_hex(WordyColors.CELL_INCORRECT, WordyColors.CELL_SELECTED, 0.5)
        return WordyColors.CELL_INCORRECT
    if status is CellStatus.HINT:
        return WordyColors.CELL_HINT
    if selected:
        return WordyColors.CELL_SELECTED
    return WordyColors.CELL
