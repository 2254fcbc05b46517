## optmap — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from dataclasses import dataclass, field


# Caller-facing option map: key (with arity suffix) -> (short name, description).
OptionInfo = tuple[str, str]
OptionInfoMap = dict[str, OptionInfo]


class OptionKind(Enum):
    FLAG = 'flag'
    REQUIRED = 'required'
    OPTIONAL = 'optional'
    REPEATED = 'repeated'


@dataclass(frozen=True)
class OptionSpec:
    long: str
    kind: OptionKind
    short: str = ''
    description: str = ''
    default: str | None = None
    key: str = ''

    @property
    def supports_argument(self) -> bool:
        return self.kind is not OptionKind.FLAG

    @property
    def requires_argument(self) -> bool:
        return self.kind in (OptionKind.REQUIRED, OptionKind.REPEATED)

    @property
    def is_repeated(self) -> bool:
        return self.kind is OptionKind.REPEATED

    def default_value(self) -> 'OptionValue':
        """Value stored when the option appears without an argument."""
        return Flag() if self.default is None else Scalar(self.default)


@dataclass(frozen=True)
class OptionTable:
    longs: dict[str, OptionSpec]
    short_to_long: dict[str, str]

    def __contains__(self, long: str) -> bool:
        return long in self.longs

    def __getitem__(self, long: str) -> OptionSpec:
        return self.longs[long]

    def by_short(self, short: str) -> OptionSpec | None:
        long = self.short_to_long.get(short)
        return None if long is None else self.longs[long]


# Parsed values are a tagged union of the three shapes below.
@dataclass(frozen=True)
class Flag:
    def plain(self) -> bool:
        return False

@dataclass(frozen=True)
class Scalar:
    value: str

    def plain(self) -> str:
        return self.value

@dataclass
class Repeated:
    values: list[str] = field(default_factory=list)

    def plain(self) -> list[str]:
        return list(self.values)


OptionValue = Flag | Scalar | Repeated
OptionMap = dict[str, OptionValue]


def to_plain(options: OptionMap) -> dict[str, bool | str | list[str]]:
    """Collapse tagged values to `False`, `str` or `list[str]`."""
    return {name: value.plain() for name, value in options.items()}
