class ParleyError(Exception):
    pass


class ParleySyntaxError(ParleyError):
    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}, col {self.column}"


class DuplicateLabelError(ParleyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Duplicate label '{self.name}'"


class UndefinedSpeakerError(ParleyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Undefined speaker '{self.name}'"


class UndefinedLabelError(ParleyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Undefined label '{self.name}'"


class ParleyRuntimeError(ParleyError):
    def __init__(self, message: str, ip: int | None = None):
        super().__init__(message)
        self.message = message
        self.ip = ip

    def __str__(self) -> str:
        if self.ip is None:
            return f"Runtime error: {self.message}"
        return f"Runtime error: {self.message} (ip={self.ip:04d})"
