"""Regression tests for application route registration."""
from fitplan.main import app


def _paths() -> dict:
    return app.openapi()["paths"]


def test_task_routes_cover_crud_verbs() -> None:
    assert {"get", "post", "put", "delete"} <= set(_paths()["/tasks"])


def test_plan_routes_registered_once() -> None:
    paths = _paths()
    for path in ("/motivate", "/mealprep"):
        assert set(paths[path]) == {"post"}, path
        operation_ids = [op["operationId"] for p in paths.values() for op in p.values()]
        assert operation_ids.count(paths[path]["post"]["operationId"]) == 1
