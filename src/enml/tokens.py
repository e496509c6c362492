class Tag:
    __slots__ = ("attrs", "kind", "name", "prefix")

    START = 0
    END = 1

    def __init__(self, kind, name, attrs=None, prefix=None):
        self.kind = kind
        self.name = name
        self.attrs = attrs if attrs is not None else []
        self.prefix = prefix

    def get(self, key, default=None):
        for name, value in self.attrs:
            if name == key:
                return value
        return default

    def __repr__(self):
        attrs = " ".join(f"{name}={value!r}" for name, value in self.attrs)
        kind_str = "start" if self.kind == self.START else "end"
        return f"<{kind_str}:{self.name} {attrs}>"


class CharacterTokens:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"CharacterTokens({self.data!r})"


class DoctypeToken:
    __slots__ = ("name", "public_id", "system_id")

    def __init__(self, name=None, public_id=None, system_id=None):
        self.name = name
        self.public_id = public_id
        self.system_id = system_id

    def to_markup(self):
        if self.public_id:
            return f'<!DOCTYPE {self.name} PUBLIC "{self.public_id}" "{self.system_id or ""}">'
        if self.system_id:
            return f'<!DOCTYPE {self.name} SYSTEM "{self.system_id}">'
        return f"<!DOCTYPE {self.name}>"


class ParseError(ValueError):
    """Raised when a document is not well-formed ENML.

    ``str()`` gives ``(line,col): code - message``. The location part is
    left out when it is unknown, and the message part when it repeats the
    code.
    """

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code
        super().__init__(str(self))

    @property
    def located(self):
        return self.line is not None and self.column is not None

    def __repr__(self):
        where = f", line={self.line}, column={self.column}" if self.located else ""
        return f"ParseError({self.code!r}{where})"

    def __str__(self):
        text = self.code if self.message == self.code else f"{self.code} - {self.message}"
        return f"({self.line},{self.column}): {text}" if self.located else text
