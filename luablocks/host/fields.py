"""
Fields shown on a block row: labels, free text and dropdown menus.
"""

from typing import Callable, Optional, Sequence, Tuple


class Field:
    """Base class for everything placed on an input row"""

    def __init__(self):
        self.name: Optional[str] = None

    def get_value(self) -> Optional[str]:
        return None


class LabelField(Field):
    """Fixed text"""

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def get_value(self) -> Optional[str]:
        return self.text

    def __repr__(self) -> str:
        return f"<LabelField {self.text!r}>"


class TextField(Field):
    """Editable free text, used by literal blocks"""

    def __init__(self, value: str = ''):
        super().__init__()
        self.value = value

    def get_value(self) -> str:
        return self.value

    def set_value(self, value) -> None:
        self.value = str(value)

    def __repr__(self) -> str:
        return f"<TextField {self.name}={self.value!r}>"


class DropdownField(Field):
    """
    Closed choice menu.

    Each choice is a (display text, value) pair. The first choice is selected
    initially. The change handler, if any, runs after every selection.
    """

    def __init__(self, choices: Sequence[Tuple[str, str]],
                 on_change: Optional[Callable[[str], None]] = None):
        super().__init__()
        self.choices = tuple(choices)
        self.value = self.choices[0][1]
        self.on_change = on_change

    @property
    def values(self):
        return [value for _, value in self.choices]

    def get_value(self) -> str:
        return self.value

    def get_text(self) -> str:
        for text, value in self.choices:
            if value == self.value:
                return text
        return self.value

    def set_change_handler(self, handler: Optional[Callable[[str], None]]) -> None:
        self.on_change = handler

    def set_value(self, value: str) -> None:
        if value not in self.values:
            raise ValueError(f"'{value}' is not a choice of dropdown '{self.name}'")
        self.value = value
        if self.on_change:
            self.on_change(value)

    def __repr__(self) -> str:
        return f"<DropdownField {self.name}={self.value!r}>"
