"""Grid map with obstacles, charging stations and task points."""

from __future__ import annotations

from dataclasses import dataclass, field

_ORIENT_SYMBOLS = (">", "v", "<")


class MapFileError(ValueError):
    """Raised when a map file is missing or malformed."""


def _second_int(line: str | None, what: str) -> int:
    tokens = [t for t in (line or "").split(" ") if t]
    if len(tokens) < 2:
        raise MapFileError(f"map header has no {what}")
    try:
        return int(tokens[1])
    except ValueError as exc:
        raise MapFileError(f"map header has a bad {what}: {tokens[1]!r}") from exc


@dataclass
class Environment:
    """A rows x cols grid; locations are ``y * cols + x``."""

    rows: int = 0
    cols: int = 0
    obstacles: list[bool] = field(default_factory=list)
    charges: list[bool] = field(default_factory=list)
    task_points: list[bool] = field(default_factory=list)
    map_name: str = ""
    file_storage_path: str = ""
    loc2charge_id: list[int] = field(default_factory=list)
    charges_locs: list[int] = field(default_factory=list)
    task_locs: list[int] = field(default_factory=list)

    def load(self, fname: str, file_storage_path: str = "") -> None:
        """Read a map in benchmark (``type ...``) or ``rows,cols`` format."""
        try:
            with open(fname, encoding="utf-8") as handle:
                lines = iter(handle.read().splitlines())
        except OSError as exc:
            raise MapFileError(f"Map file {fname} does not exist.") from exc
        self.file_storage_path = file_storage_path
        start = fname.rfind("/") + 1
        dot = fname.rfind(".")
        self.map_name = fname[start:] if dot < 0 else fname[start:start + dot]

        header = next(lines, None)
        if not header:
            raise MapFileError(f"Map file {fname} is empty.")
        if header[0] == "t":
            self.rows = _second_int(next(lines, None), "height")
            self.cols = _second_int(next(lines, None), "width")
            next(lines, None)
        else:
            tokens = [t for t in header.split(",") if t]
            try:
                self.rows, self.cols = int(tokens[0]), int(tokens[1])
            except (IndexError, ValueError) as exc:
                raise MapFileError(f"bad map size line: {header!r}") from exc

        size = self.rows * self.cols
        self.obstacles = [False] * size
        self.charges = [False] * size
        self.task_points = [False] * size
        self.loc2charge_id = [-1] * size
        self.charges_locs = []
        self.task_locs = []
        for y in range(self.rows):
            line = next(lines, None)
            if line is None or len(line) < self.cols:
                raise MapFileError(f"map row {y} is missing or too short")
            for x, cell in enumerate(line[: self.cols]):
                loc = self.cols * y + x
                self.obstacles[loc] = cell in "@T"
                if cell == "C":
                    self.charges[loc] = True
                    self.loc2charge_id[loc] = len(self.charges_locs)
                    self.charges_locs.append(loc)
                if cell in "ES":
                    self.task_points[loc] = True
                    self.task_locs.append(loc)

    def get_xy(self, loc: int) -> tuple[int, int]:
        """Column and row of a location."""
        return loc % self.cols, loc // self.cols

    def get_loc(self, x: int, y: int) -> int:
        """Location of a column and row."""
        return y * self.cols + x

    def is_out_of_boundary(self, x: int, y: int) -> bool:
        return x < 0 or y < 0 or x >= self.cols or y >= self.rows

    def str_orient(self, ori: int) -> str:
        """Arrow symbol for an orientation."""
        return _ORIENT_SYMBOLS[ori] if 0 <= ori < 3 else "^"

    def describe(self, loc: int, ori: int | None = None) -> str:
        """``(x, y)`` or ``(x, y, arrow)`` for a location."""
        x, y = self.get_xy(loc)
        if ori is None:
            return f"({x}, {y})"
        return f"({x}, {y}, {self.str_orient(ori)})"