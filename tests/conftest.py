"""Shared pytest fixtures for all tests."""

import json

import pytest

from tests.test_utils import make_finance_internship, make_finance_student


@pytest.fixture
def finance_student():
    return make_finance_student()


@pytest.fixture
def finance_internship():
    return make_finance_internship()


@pytest.fixture
def skill_catalog_file(tmp_path):
    """Write a small skill catalog to a temporary JSON file."""
    catalog_path = tmp_path / "skills.json"
    catalog_path.write_text(
        json.dumps(
            {
                "skills": [
                    {
                        "id": "skill-excel",
                        "slug": "excel",
                        "label": "Excel",
                        "aliases": ["ms excel", "microsoft excel"],
                    },
                    {
                        "id": "skill-financial-modeling",
                        "slug": "financial-modeling",
                        "label": "Financial Modeling",
                        "aliases": ["financial modelling"],
                    },
                    {
                        "id": "skill-nodejs",
                        "slug": "node-js",
                        "label": "Node.js",
                        "aliases": ["nodejs"],
                    },
                    {
                        "id": "skill-python",
                        "slug": "python",
                        "label": "Python",
                        "aliases": [],
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    return catalog_path
