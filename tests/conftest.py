import os

# Point the store at a private in-memory database before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.core.errors import NotFoundError
from app.db.schema import clear_tables, init_schema
from app.main import app
from app.schemas.schemas import Company, PlacementStats, PolicyConfig, Student


class InMemoryFacts:
    """Fact gatherer over plain lists; counts placement snapshots taken."""

    def __init__(self, students, companies):
        self.students = list(students)
        self.companies = {c.id: c for c in companies}
        self.stats_calls = 0

    def get_student(self, student_id):
        for student in self.students:
            if student.id == student_id:
                return student
        raise NotFoundError("Student", student_id)

    def get_company(self, company_id):
        if company_id not in self.companies:
            raise NotFoundError("Company", company_id)
        return self.companies[company_id]

    def placement_stats(self):
        self.stats_calls += 1
        placed = sum(1 for s in self.students if s.is_placed)
        return PlacementStats(placed_count=placed, total_count=len(self.students))

    def list_students(self):
        return list(self.students)


class StaticPolicies:
    """Fixed policy document; counts how often it is read."""

    def __init__(self, config):
        self.config = config
        self.reads = 0

    def get_config(self):
        self.reads += 1
        return self.config


@pytest.fixture
def make_student():
    def _make(**overrides):
        fields = {
            "id": 1,
            "name": "Test Student",
            "cgpa": 8.0,
            "is_placed": True,
            "current_salary": 800000,
            "companies_applied": 0,
            "dream_offer": 0,
            "dream_company": "",
        }
        fields.update(overrides)
        return Student(**fields)
    return _make


@pytest.fixture
def make_company():
    def _make(**overrides):
        fields = {"id": "C1", "name": "Acme Corp", "offered_salary": 1000000}
        fields.update(overrides)
        return Company(**fields)
    return _make


@pytest.fixture
def make_config():
    """Build a PolicyConfig from camelCase blocks; omitted blocks are disabled."""
    def _make(**blocks):
        return PolicyConfig.model_validate(blocks)
    return _make


@pytest.fixture
def in_memory_facts():
    return InMemoryFacts


@pytest.fixture
def static_policies():
    return StaticPolicies


@pytest.fixture
def db():
    """Empty schema for each test."""
    init_schema()
    clear_tables()
    yield
    clear_tables()


@pytest.fixture
def client(db):
    return TestClient(app)
