# lifecycle_peek/tests/conftest.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import ImproperlyConfigured
from rest_framework.test import APIClient

from lifecycle_peek.conf import LifecyclePeekSettings
from lifecycle_peek.dom import Node
from records.models import Experiment, Project, ReferenceSample, Sample


def _rand(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


# -------------------------------------------------
# In-memory class registry
# -------------------------------------------------

@dataclass
class FakeRecord:
    class_name: str
    pk: str
    status: str = ""


class FakeRegistry:
    """
    ClassMetadataProvider over plain dicts.

    hierarchy: root -> descendants (in encounter order)
    state_codes: class -> state attribute code
    broken: classes whose state lookup fails like an inconsistent model
    """

    def __init__(
        self,
        hierarchy: Dict[str, List[str]],
        state_codes: Dict[str, str],
        broken: tuple = (),
    ):
        self.hierarchy = hierarchy
        self.state_codes = state_codes
        self.broken = set(broken)
        self.lookups: List[str] = []

    def root_classes(self):
        return list(self.hierarchy)

    def child_classes(self, class_name):
        return list(self.hierarchy.get(class_name, []))

    def class_name_of(self, obj):
        return obj.class_name

    def state_attribute_code(self, class_name):
        self.lookups.append(class_name)
        if class_name in self.broken:
            raise ImproperlyConfigured(f"{class_name} has a broken state attribute")
        return self.state_codes.get(class_name, "")

    def lifecycle(self, class_name):
        return None

    def get_class(self, class_name):
        raise LookupError(class_name)


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry(
        hierarchy={
            "Ticket": ["UserRequest", "Incident", "Problem"],
            "Contact": ["Person"],
            "Change": [],
        },
        state_codes={
            "Ticket": "status",
            "UserRequest": "status",
            "Incident": "status",
            "Problem": "",
            "Change": "state",
        },
    )


@pytest.fixture
def settings_factory() -> Callable[..., Callable[[], LifecyclePeekSettings]]:
    def _factory(**overrides) -> Callable[[], LifecyclePeekSettings]:
        value = LifecyclePeekSettings(**overrides)
        return lambda: value

    return _factory


# -------------------------------------------------
# Host records
# -------------------------------------------------

@pytest.fixture
def project(db) -> Project:
    return Project.objects.create(name=_rand("Project"))


@pytest.fixture
def sample_factory(db, project) -> Callable[..., Sample]:
    def _factory(*, status: str = "REGISTERED", sample_id: Optional[str] = None, **extra) -> Sample:
        return Sample.objects.create(
            project=project,
            sample_id=sample_id or _rand("SAMPLE"),
            status=status,
            **extra,
        )

    return _factory


@pytest.fixture
def sample(sample_factory) -> Sample:
    return sample_factory(status="IN_PROCESS")


@pytest.fixture
def reference_sample(db, project) -> ReferenceSample:
    return ReferenceSample.objects.create(
        project=project,
        sample_id=_rand("REF"),
        status="QC_PASSED",
        certificate_number="CRM-001",
    )


@pytest.fixture
def experiment(db, project) -> Experiment:
    return Experiment.objects.create(project=project, name=_rand("Experiment"), status="RUNNING")


# -------------------------------------------------
# Users and clients
# -------------------------------------------------

@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(username="labtech", password="pass123")


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def auth_client(api_client, user) -> APIClient:
    api_client.force_authenticate(user=user)
    return api_client


# -------------------------------------------------
# DOM
# -------------------------------------------------

def record_page(object_class: str, object_id: str, state_code: str = "status") -> Node:
    """
    Console record view: object details with a read-only state field.
    """
    state_field = Node(
        "div",
        attrs={"data-attribute-code": state_code, "data-attribute-flag-read-only": "true"},
        classes=["field_container"],
        children=[Node("div", classes=["field_data"], children=[Node("div", classes=["field_value"], text="new")])],
    )
    details = Node(
        "div",
        attrs={"data-object-class": object_class, "data-object-id": object_id},
        classes=["object-details"],
        children=[
            Node("div", attrs={"data-attribute-code": "title"}, classes=["field_container"]),
            state_field,
        ],
    )
    return Node("body", children=[details])


@pytest.fixture
def page_factory() -> Callable[..., Node]:
    return record_page


@pytest.fixture
def record_factory() -> Callable[..., FakeRecord]:
    return FakeRecord


@pytest.fixture
def registry_factory() -> Callable[..., FakeRegistry]:
    return FakeRegistry
