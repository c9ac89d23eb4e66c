"""Example usage of the typed_access library."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from typed_access import (
    PathNotFoundError,
    get_path,
    get_path_int,
    get_path_str,
    set_defaults,
    tagged,
    uint16,
)


@dataclass
class Address:
    street: str = tagged("Müllerstraße", default="")
    number: uint16 = tagged("400", default=0)
    city: str = tagged("Berlin", default="")
    ZIP: str = tagged("10000", default="")


@dataclass
class Person:
    name: str = tagged("Karl", default="")
    birth_date: datetime | None = tagged("04.09.1990", layout="%d.%m.%Y", default=None)
    concentration: timedelta = tagged("2h30m", default=timedelta(0))
    hobbies: dict[str, int] = tagged('{"Motorcycle": 10, "Motor.cycle": 3}', default_factory=dict)
    addresses: list[Address] = field(default_factory=lambda: [Address(), Address()])
    nickname: str | None = None


person = Person()

# Fill every tagged field, walking into the address list
set_defaults(person)
print(f"Defaults filled: {person}")

print("\nPath lookups:")
for path in [
    "name",
    "birth_date",
    "concentration",
    "addresses[1].street",
    "$..addresses/0/ZIP",
    'hobbies."Motor.cycle"',
    "nickname",
]:
    print(f"  {path!r:28} -> {get_path(person, path)!r}")

print("\nTyped getters:")
print(f"  city:   {get_path_str(person, 'addresses.0.city')}")
print(f"  number: {get_path_int(person, 'addresses.0.number')}")
try:
    get_path_str(person, "nickname")
except PathNotFoundError as e:
    print(f"  nickname: {e}")
