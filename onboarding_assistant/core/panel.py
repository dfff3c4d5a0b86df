"""Side-panel visibility state."""


class PanelState:
    """Whether the application summary panel is showing."""

    def __init__(self) -> None:
        self.is_open = False

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def apply(self, action: str) -> bool:
        """Apply an ``open``/``close``/``toggle`` action by name and return the new state."""
        actions = {"open": self.open, "close": self.close, "toggle": self.toggle}
        if action not in actions:
            raise ValueError(f"Unknown panel action: {action}")
        actions[action]()
        return self.is_open
