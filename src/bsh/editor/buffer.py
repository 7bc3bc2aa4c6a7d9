"""Cursor-addressable edit buffer for the line being typed."""


class Buffer:
    """Mutable line of text with a cursor in [0, len()].

    Positions are offsets into the Python string.
    """

    def __init__(self) -> None:
        self._text = ""
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._text)

    def len(self) -> int:
        return len(self._text)

    def is_empty(self) -> bool:
        return not self._text

    def get(self) -> str:
        return self._text

    def get_cursor(self) -> int:
        return self._cursor

    def set(self, text: str) -> None:
        """Replace the content; the cursor moves to the end."""
        self._text = text
        self._cursor = len(text)

    def clear(self) -> None:
        self._text = ""
        self._cursor = 0

    def insert(self, data: str) -> None:
        self.insert_without_moving(data)
        self._cursor += len(data)

    def insert_without_moving(self, data: str) -> None:
        self._text = self._text[:self._cursor] + data + self._text[self._cursor:]

    def move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self) -> None:
        if self._cursor < len(self._text):
            self._cursor += 1

    def move_to_start(self) -> None:
        self._cursor = 0

    def move_to_end(self) -> None:
        self._cursor = len(self._text)

    def delete_left(self) -> None:
        """Backspace."""
        if self._cursor > 0:
            self._cursor -= 1
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]

    def delete_right(self) -> None:
        if self._cursor < len(self._text):
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]
