import unittest
from enum import Enum

import pytest

from liteinject import FactorySelector, UnsupportedTagError


class Vehicle: ...


class Car(Vehicle): ...


class Bike(Vehicle): ...


class TestVehicleFactorySelector(unittest.TestCase):
    vehicles: FactorySelector[Vehicle]

    def setUp(self):
        self.vehicles = FactorySelector({"car": Car, "bike": Bike})

    def test_create_dispatches_by_tag(self):
        assert type(self.vehicles.create("car")) is Car
        assert type(self.vehicles.create("bike")) is Bike

    def test_create_returns_fresh_instance_every_call(self):
        a = self.vehicles.create("car")
        b = self.vehicles.create("car")

        assert a is not b

    def test_unknown_tag_raises_unsupported_tag_naming_tag(self):
        with pytest.raises(UnsupportedTagError) as ctx:
            self.vehicles.create("truck")

        assert ctx.value.tag == "truck"
        assert ctx.value.supported == frozenset({"car", "bike"})
        assert "truck" in str(ctx.value)

    def test_unsupported_tag_is_a_lookup_error(self):
        with pytest.raises(LookupError):
            self.vehicles.create("truck")

    def test_tags_are_the_closed_set(self):
        assert self.vehicles.tags == frozenset({"car", "bike"})
        assert "car" in self.vehicles
        assert "truck" not in self.vehicles

    def test_factory_for_builds_new_member_per_call(self):
        make_bike = self.vehicles.factory_for("bike")

        first = make_bike()
        second = make_bike()

        assert type(first) is Bike
        assert first is not second

    def test_factory_for_rejects_unknown_tag_immediately(self):
        with pytest.raises(UnsupportedTagError):
            self.vehicles.factory_for("truck")


def test_mapping_changes_after_construction_are_ignored():
    constructors = {"car": Car}
    selector = FactorySelector(constructors)

    constructors["bike"] = Bike

    with pytest.raises(UnsupportedTagError):
        selector.create("bike")


def test_enum_tags():
    class Kind(Enum):
        CAR = "car"
        BIKE = "bike"

    selector = FactorySelector({Kind.CAR: Car, Kind.BIKE: Bike})

    assert isinstance(selector.create(Kind.BIKE), Bike)
    with pytest.raises(UnsupportedTagError):
        selector.create("bike")


def test_create_passes_keyword_arguments_to_constructor():
    class House:
        def __init__(self, windows: int = 0, doors: int = 0):
            self.windows = windows
            self.doors = doors

    selector = FactorySelector({"house": House})
    house = selector.create("house", windows=4, doors=2)

    assert (house.windows, house.doors) == (4, 2)


def test_unhashable_tag_raises_unsupported_tag():
    selector = FactorySelector({"car": Car})

    with pytest.raises(UnsupportedTagError):
        selector.create(["car"])


def test_empty_constructor_table_raises_value_error():
    with pytest.raises(ValueError):
        FactorySelector({})


def test_non_callable_constructor_raises_type_error():
    with pytest.raises(TypeError):
        FactorySelector({"car": "Car"})  # type: ignore[dict-item]
