## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class OptionError(Exception):
    def __init__(self, message: str = "", *, option: str | None = None):
        """Base class for all errors raised while reading options."""
        super().__init__(message)
        self.option: str | None = option

class UnrecognizedOption(OptionError, LookupError):
    def __init__(self, option: str):
        super().__init__(f"unrecognized option {option}", option=option)

class UnexpectedArgument(OptionError, ValueError):
    def __init__(self, option: str, value: str | None = None):
        message = f"option {option} does not take an argument"
        if value is not None: message += f", but `{value}` was given"
        super().__init__(message, option=option)
        self.value = value

class EmptyValueAfterEquals(OptionError, ValueError):
    def __init__(self, option: str):
        super().__init__(f"option {option} had an equal sign with no value", option=option)

class MissingRequiredArgument(OptionError, ValueError):
    def __init__(self, option: str):
        super().__init__(f"option {option} requires an argument", option=option)

class MashedArgRequired(OptionError, ValueError):
    """Short option that needs an argument was combined with other flags, e.g. `-vn`."""
    def __init__(self, option: str):
        super().__init__(f"option {option} requires an argument and cannot be combined with other flags", option=option)


class MalformedSpecification(OptionError, ValueError):
    """Setup-time problems with the option map itself, found before any argument is read."""
    def __init__(self, message: str, *, key: str | None = None):
        super().__init__(message)
        self.key = key

class DuplicateOption(MalformedSpecification):
    pass
