# lifecycle_peek/tests/test_eligibility.py

import pytest
from django.core.exceptions import ImproperlyConfigured

from lifecycle_peek.eligibility import EligibilityResolver


def test_class_without_state_attribute_is_never_eligible(fake_registry, settings_factory, record_factory):
    for disabled in [(), ("Contact",), ("Problem", "Ticket")]:
        resolver = EligibilityResolver(fake_registry, settings_factory(disabled_classes=disabled))
        assert resolver.is_eligible(record_factory("Contact", "1")) is False
        assert resolver.is_eligible(record_factory("Problem", "2")) is False


def test_disabled_class_is_not_eligible_even_with_state(fake_registry, settings_factory, record_factory):
    resolver = EligibilityResolver(fake_registry, settings_factory(disabled_classes=("Incident",)))

    assert resolver.is_eligible(record_factory("Incident", "7")) is False
    assert resolver.is_eligible(record_factory("UserRequest", "7")) is True
    assert resolver.is_eligible(record_factory("Ticket", "7")) is True


def test_broken_metadata_propagates(fake_registry, settings_factory, record_factory):
    fake_registry.broken.add("Change")
    resolver = EligibilityResolver(fake_registry, settings_factory())

    with pytest.raises(ImproperlyConfigured):
        resolver.is_eligible(record_factory("Change", "1"))

    with pytest.raises(ImproperlyConfigured):
        resolver.enum_eligible_classes()


def test_disabled_check_happens_before_metadata_lookup(fake_registry, settings_factory, record_factory):
    fake_registry.broken.add("Change")
    resolver = EligibilityResolver(fake_registry, settings_factory(disabled_classes=("Change",)))

    assert resolver.is_eligible(record_factory("Change", "1")) is False
    assert "Change" not in fake_registry.lookups


def test_enum_eligible_classes_order_and_filtering(fake_registry, settings_factory):
    resolver = EligibilityResolver(fake_registry, settings_factory())

    eligible = resolver.enum_eligible_classes()

    assert list(eligible) == ["Ticket", "UserRequest", "Incident", "Change"]
    assert eligible == {
        "Ticket": "status",
        "UserRequest": "status",
        "Incident": "status",
        "Change": "state",
    }
    assert all(code for code in eligible.values())


def test_enum_eligible_classes_is_idempotent(fake_registry, settings_factory):
    resolver = EligibilityResolver(fake_registry, settings_factory())

    first = resolver.enum_eligible_classes()
    second = resolver.enum_eligible_classes()

    assert first == second
    assert list(first) == list(second)


def test_roots_listed_before_descendants(registry_factory, settings_factory):
    registry = registry_factory(
        hierarchy={"B": ["B1"], "A": ["A1", "A2"]},
        state_codes={"A": "s", "A1": "s", "A2": "s", "B": "s", "B1": "s"},
    )
    resolver = EligibilityResolver(registry, settings_factory())

    order = list(resolver.enum_eligible_classes())

    # Traversal order, not alphabetical
    assert order == ["B", "B1", "A", "A1", "A2"]
    for root, children in registry.hierarchy.items():
        for child in children:
            assert order.index(root) < order.index(child)
