# parameter.py
from dataclasses import dataclass, fields


def readConfig(path) -> dict:
    """
    Read a plain ``key = value ...`` configuration file.

    Blank lines and everything after a ``#`` are ignored. Values are kept as
    lists of strings, conversion is up to the caller.
    """
    entries = {}
    with open(path, "r") as handle:
        for number, line in enumerate(handle, start=1):
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            if "=" not in line:
                raise ValueError(f"{path}:{number}: expected 'key = value', got {line!r}")

            key, value = line.split("=", 1)
            key = key.strip().lower()
            values = value.split()
            if not key or not values:
                raise ValueError(f"{path}:{number}: empty key or value")
            entries[key] = values
    return entries


@dataclass
class Parameter:
    """Run parameters of the projection scheme."""

    re: float = 1000.0
    omega: float = 1.7
    alpha: float = 0.9
    dt: float = 0.2
    tend: float = 16.4
    iterMax: int = 100
    eps: float = 0.001
    tau: float = 0.5

    # Short names used in the parameter files
    aliases = {
        "omg": "omega",
        "iter": "iterMax",
        "itermax": "iterMax",
        "iter_max": "iterMax",
    }

    def __post_init__(self) -> None:
        if self.iterMax < 1:
            raise ValueError(f"iterMax must allow at least one pressure cycle, got {self.iterMax}")

    @classmethod
    def load(cls, path) -> "Parameter":
        known = {f.name.lower(): f for f in fields(cls)}
        values = {}

        for key, raw in readConfig(path).items():
            key = cls.aliases.get(key, key).lower()
            if key not in known:
                raise KeyError(f"unknown parameter '{key}' in {path}")

            field = known[key]
            convert = int if field.type in (int, "int") else float
            try:
                values[field.name] = convert(raw[0])
            except ValueError:
                raise ValueError(f"parameter '{key}' in {path}: cannot read {raw[0]!r}") from None

        return cls(**values)
