"""Debug-guard nesting depth for a single file scan."""


class GuardScope:
    """Counts how many sentinel-guarded ``if`` statements enclose the cursor.

    One instance per file. ``enter``/``exit`` must be called in pairs; the
    scanner checks ``depth == 0`` once the walk is over.
    """

    def __init__(self):
        self.depth = 0

    def enter(self) -> None:
        self.depth += 1

    def exit(self) -> None:
        self.depth -= 1

    @property
    def active(self) -> bool:
        """True while inside at least one guarded branch."""
        return self.depth > 0

    @property
    def balanced(self) -> bool:
        return self.depth == 0
