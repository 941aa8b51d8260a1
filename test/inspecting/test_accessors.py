"""
Test discovery of getters and setters.
"""

import functools
from typing import Annotated, Optional

from pytest import raises

from recordjson.exceptions import DiscoveryError
from recordjson.inspecting.accessors import (
    Getter,
    Setter,
    derive_property_name,
    discover_accessors,
)
from recordjson.numeric import (
    DOUBLE,
    FLOAT,
    INTEGER,
    INTEGRAL,
    LONG,
    SHORT,
    float32,
    int16,
    int32,
    int64,
)


class Person:
    def __init__(self):
        self._name = ""
        self._age = 0
        self._active = False

    def getName(self) -> str:
        return self._name

    def setName(self, name: str) -> None:
        self._name = name

    def getAge(self) -> int:
        return self._age

    def setAge(self, age: int) -> None:
        self._age = age

    def isActive(self) -> bool:
        return self._active

    def setActive(self, active: bool) -> None:
        self._active = active

    def describe(self) -> str:
        return f"{self._name} ({self._age})"

    def get(self) -> str:
        return ""

    def set(self, value) -> None:
        pass

    def getNothing(self) -> None:
        pass

    def getWithArg(self, arg) -> int:
        return 0

    def setPair(self, a, b) -> None:
        pass

    @staticmethod
    def getStatic() -> int:
        return 0

    @classmethod
    def getCls(cls) -> int:
        return 0

    def _getHidden(self) -> int:
        return 0


class SnakeCase:
    def get_first_name(self) -> str:
        return ""

    def set_first_name(self, value: str) -> None:
        pass

    def is_enabled(self) -> bool:
        return True

    def get_(self) -> int:
        return 0


class Base:
    def getX(self) -> int:
        return 1

    def getZ(self) -> int:
        return 3


class Derived(Base):
    def getX(self) -> int:
        return 10

    def getY(self) -> int:
        return 2

    def getZ(self, arg) -> int:
        return arg


class Writable:
    def __init__(self):
        self.written = None

    def setX(self, value: int) -> None:
        self.written = ("base", value)


class Scaled(Base, Writable):
    def getX(self) -> int:
        return 100

    def setX(self, value: int) -> None:
        self.written = ("scaled", value)


class Callback:
    def __call__(self, obj):
        return 0


class Cached:
    getCallback = Callback()

    class getNested:
        pass

    @functools.cache
    def getValue(self) -> int:
        return 42

    @functools.lru_cache
    def getLabel(self) -> str:
        return "label"


class Reading(float):
    def getUnit(self) -> str:
        return "kPa"


class Numbers:
    def setShort(self, value: int16) -> None:
        pass

    def setInt(self, value: int32) -> None:
        pass

    def setLong(self, value: int) -> None:
        pass

    def setWide(self, value: int64) -> None:
        pass

    def setFloat(self, value: Optional[float32]) -> None:
        pass

    def setDouble(self, value: float | None) -> None:
        pass

    def setAnnotated(self, value: Annotated[int32, "meta"]) -> None:
        pass

    def setUnion(self, value: int | str) -> None:
        pass

    def setFlag(self, value: bool) -> None:
        pass

    def setUntyped(self, value) -> None:
        pass

    def setUnresolved(self, value: "Missing") -> None:  # type: ignore
        pass


class Temperature:
    def __init__(self):
        self._celsius = 0.0
        self._count = 0

    @property
    def celsius(self) -> float32:
        return float32(self._celsius)

    @celsius.setter
    def celsius(self, value: float32):
        self._celsius = value

    @property
    def kelvin(self) -> float:
        return self._celsius + 273.15

    @property
    def count(self) -> int:
        return self._count

    @count.setter
    def count(self, value):
        self._count = value


class Clash:
    @property
    def x(self) -> int:
        return 1

    def getX(self) -> int:
        return 2


def test_derive_property_name():
    assert derive_property_name("getName", "get") == "name"
    assert derive_property_name("getURL", "get") == "uRL"
    assert derive_property_name("isActive", "is") == "active"
    assert derive_property_name("setFirstName", "set") == "firstName"
    assert derive_property_name("get_first_name", "get") == "first_name"
    assert derive_property_name("setX", "set") == "x"

    # bare prefix yields no name
    assert derive_property_name("get", "get") is None
    assert derive_property_name("is", "is") is None
    assert derive_property_name("set_", "set") is None

    # prefix mismatch
    assert derive_property_name("name", "get") is None


def test_discover():
    """
    Test discovery following naming conventions.
    """
    table = discover_accessors(Person)

    assert set(table.getters) == {"name", "age", "active"}
    assert set(table.setters) == {"name", "age", "active"}

    getter = table.getters["name"]
    assert isinstance(getter, Getter)
    assert getter.func is Person.getName

    setter = table.setters["age"]
    assert isinstance(setter, Setter)
    assert setter.func is Person.setAge
    assert setter.number_type is INTEGRAL
    assert setter.is_property_number

    assert table.setters["name"].number_type is None
    assert table.setters["active"].number_type is None


def test_invoke():
    table = discover_accessors(Person)
    person = Person()

    table.setters["name"].invoke(person, "Alice")
    table.setters["age"].invoke(person, 41.9)
    table.setters["active"].invoke(person, True)

    assert table.getters["name"].invoke(person) == "Alice"
    assert table.getters["age"].invoke(person) == 41
    assert table.getters["active"].invoke(person) is True


def test_snake_case():
    table = discover_accessors(SnakeCase)

    assert set(table.getters) == {"first_name", "enabled"}
    assert set(table.setters) == {"first_name"}


def test_inheritance():
    """
    Test that inherited accessors are discovered and overrides take precedence.
    """
    table = discover_accessors(Derived)

    assert set(table.getters) == {"x", "y"}
    assert table.getters["x"].func is Derived.getX
    assert table.getters["x"].invoke(Derived()) == 10


def test_include():
    """
    Test filtering properties with a predicate.
    """
    table = discover_accessors(Person, lambda name, _: name != "age")

    assert set(table.getters) == {"name", "active"}
    assert set(table.setters) == {"name", "active"}

    members = []
    discover_accessors(SnakeCase, lambda name, member: members.append(member) or True)
    assert SnakeCase.get_first_name in members


def test_number_types():
    """
    Test number type lookup by setter annotations.
    """
    setters = discover_accessors(Numbers).setters

    assert setters["short"].number_type is SHORT
    assert setters["int"].number_type is INTEGER
    assert setters["long"].number_type is INTEGRAL
    assert setters["wide"].number_type is LONG
    assert setters["float"].number_type is FLOAT
    assert setters["double"].number_type is DOUBLE
    assert setters["annotated"].number_type is INTEGER

    assert setters["union"].number_type is None
    assert setters["flag"].number_type is None
    assert setters["untyped"].number_type is None
    assert setters["unresolved"].number_type is None


def test_properties():
    table = discover_accessors(Temperature)

    assert set(table.getters) == {"celsius", "kelvin", "count"}
    assert set(table.setters) == {"celsius", "count"}

    assert table.setters["celsius"].number_type is FLOAT

    # falls back to getter's return annotation
    assert table.setters["count"].number_type is INTEGRAL

    temperature = Temperature()
    table.setters["celsius"].invoke(temperature, 0.1)
    assert isinstance(temperature._celsius, float32)


def test_clash():
    """
    Test that methods take precedence over properties with the same name.
    """
    table = discover_accessors(Clash)

    assert set(table.getters) == {"x"}
    assert table.getters["x"].func is Clash.getX


def test_immutable():
    table = discover_accessors(Person)

    with raises(TypeError):
        table.getters["foo"] = table.getters["name"]  # type: ignore


def test_not_a_class():
    with raises(DiscoveryError, match="Not a class"):
        discover_accessors(Person())  # type: ignore

    with raises(DiscoveryError):
        discover_accessors(42)  # type: ignore


def test_subclass_dispatch():
    """
    Test that accessors discovered on a base class invoke overrides on instances of
    a subclass.
    """
    table = discover_accessors(Base)
    assert table.getters["x"].member_name == "getX"
    assert table.getters["x"].invoke(Base()) == 1
    assert table.getters["x"].invoke(Scaled()) == 100

    setter = discover_accessors(Writable).setters["x"]
    obj = Scaled()
    setter.invoke(obj, 2.5)
    assert obj.written == ("scaled", 2)


def test_property_subclass_dispatch():
    class Hotter(Temperature):
        @property
        def kelvin(self) -> float:
            return 1000.0

    table = discover_accessors(Temperature)
    assert table.getters["kelvin"].is_attribute
    assert table.getters["kelvin"].invoke(Hotter()) == 1000.0

    obj = Hotter()
    table.setters["count"].invoke(obj, 7.9)
    assert obj.count == 7


def test_cached():
    """
    Test that methods wrapped by decorators producing non-function callables are
    discovered, while other callables are skipped.
    """
    table = discover_accessors(Cached)

    assert set(table.getters) == {"value", "label"}
    assert table.getters["value"].invoke(Cached()) == 42
    assert table.getters["label"].invoke(Cached()) == "label"


def test_builtin_base():
    """
    Test that methods inherited from a builtin base, e.g. `float.is_integer()`, are
    not accessors.
    """
    table = discover_accessors(Reading)

    assert set(table.getters) == {"unit"}
    assert not table.setters
    assert table.getters["unit"].invoke(Reading(1.5)) == "kPa"
