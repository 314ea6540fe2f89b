import sys
from typing import List, Optional, Sequence, TextIO

from maze_lab.run.driver import Frame, RunResult
from maze_lab.viz.display import CellTag

RESET = "\033[0m"
BOLD = "\033[1m"
WHITE = "\033[97m"
CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"

BG_WALL = "\033[48;5;235m"   # Dark gray
BG_OPEN = "\033[48;5;255m"   # Light
BG_START = "\033[42m"        # Green
BG_END = "\033[41m"          # Red
FG_FINAL = "\033[32;1m"      # Bright green

# Per-engine palette: (header, visited bg, solved-path bg)
PALETTES = (
    ("\033[34m", "\033[48;5;33m", "\033[48;5;21m"),     # Blue
    ("\033[38;5;208m", "\033[48;5;208m", "\033[48;5;202m"),  # Orange
)

GAP = "    "


def center_pad(text: str, width: int) -> str:
    if len(text) >= width:
        return text
    pad = (width - len(text)) // 2
    return " " * pad + text + " " * (width - len(text) - pad)


def pad_right(text: str, width: int) -> str:
    return text if len(text) >= width else text + " " * (width - len(text))


def path_label(frame: Frame) -> str:
    if frame.path_length is None:
        return "..."
    return str(frame.path_length) if frame.path_length > 0 else "none"


class TerminalRenderer:
    """Draws frames as two-character ANSI cells, side by side when comparing."""

    def __init__(self, use_color: bool = True, stream: TextIO = None):
        self.use_color = use_color
        self.stream = stream if stream is not None else sys.stdout

    def col(self, code: str) -> str:
        return code if self.use_color else ""

    def cell(self, tag: int, slot: int) -> str:
        header, bg_visited, bg_solved = PALETTES[slot % len(PALETTES)]
        ch = "  "

        if tag == CellTag.WALL:
            # Without color walls still need to be visible
            bg = BG_WALL
            if not self.use_color: ch = "██"
        elif tag == CellTag.START:
            bg, ch = BG_START, self.col(BOLD + WHITE) + "S "
        elif tag == CellTag.END:
            bg, ch = BG_END, self.col(BOLD + WHITE) + "E "
        elif tag == CellTag.VISITED:
            bg = bg_visited
            if not self.use_color: ch = "··"
        elif tag == CellTag.SOLVED_PATH:
            bg, ch = bg_solved, self.col(BOLD + WHITE) + ("██" if self.use_color else "**")
        elif tag == CellTag.FINAL_PATH:
            bg, ch = "", self.col(FG_FINAL) + ("██" if self.use_color else "**")
        else:
            bg = BG_OPEN

        return self.col(bg) + ch

    def format_frames(self, frames: Sequence[Frame], suffix: str = "") -> str:
        size = frames[0].display.shape[0]
        width = size * 2
        out: List[str] = [CURSOR_HOME]

        # Header
        headers = []
        for i, frame in enumerate(frames):
            color = PALETTES[i % len(PALETTES)][0]
            headers.append(self.col(BOLD + color) + center_pad(frame.name + suffix, width) + self.col(RESET))
        out.append(GAP.join(headers) + "\n")

        # Maze rows
        for r in range(size):
            rows = []
            for i, frame in enumerate(frames):
                rows.append("".join(self.cell(int(tag), i) for tag in frame.display[r]) + self.col(RESET))
            out.append(GAP.join(rows) + "\n")

        # Stats
        out.append("\n")
        if len(frames) > 1:
            stats = []
            for i, frame in enumerate(frames):
                color = PALETTES[i % len(PALETTES)][0]
                text = pad_right(f" Steps: {frame.steps:<6d} Path: {path_label(frame):<6}", width)
                stats.append(self.col(BOLD + color) + text + self.col(RESET))
            out.append(GAP.join(stats))
        else:
            frame = frames[0]
            out.append(self.col(BOLD) + f" Steps: {frame.steps}  |  Path: {path_label(frame)}" + self.col(RESET))
        out.append("\n")
        return "".join(out)

    def banner(self, text: str):
        self.stream.write(self.col(BOLD) + text + self.col(RESET) + "\n")
        self.stream.flush()

    def clear(self):
        self.stream.write(CLEAR_SCREEN)
        self.stream.flush()

    def render(self, frames: Sequence[Frame], suffix: str = ""):
        self.stream.write(self.format_frames(frames, suffix))
        self.stream.flush()

    def format_summary(self, results: Sequence[RunResult]) -> str:
        rule = self.col(BOLD) + "═" * 39 + self.col(RESET)
        lines = ["", rule, self.col(BOLD) + "  RESULTS" + self.col(RESET), rule]

        for res in results:
            found = str(res.path_length) if res.path else "no path found"
            lines.append(f"  {res.name:<20}  Steps: {res.steps:<6d}  Path length: {found}")
            if res.fault:
                lines.append(self.col("\033[31m") + f"    {res.fault}" + self.col(RESET))

        verdict = compare_verdict(results)
        if verdict:
            lines.append("")
            lines.append(self.col(BOLD + "\033[32m") + f"  → {verdict}" + self.col(RESET))
        lines.append("")
        return "\n".join(lines) + "\n"

    def summary(self, results: Sequence[RunResult]):
        self.stream.write(self.format_summary(results))
        self.stream.flush()


def compare_verdict(results: Sequence[RunResult]) -> Optional[str]:
    if len(results) < 2:
        return None
    a, b = results[0], results[1]
    if not a.path or not b.path:
        return None
    if a.path_length < b.path_length:
        return f"{a.name} found a shorter path!"
    if b.path_length < a.path_length:
        return f"{b.name} found a shorter path!"
    return "Both found paths of equal length."
