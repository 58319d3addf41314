import json

from todo_api.generate_openapi import generate_openapi


def test_writes_schema_with_routes_and_tags(tmp_path, app):
    out = tmp_path / "interfaces" / "openapi.json"
    written = generate_openapi(str(out), app=app)

    assert written == str(out)
    schema = json.loads(out.read_text(encoding="utf-8"))
    assert schema["info"]["title"] == "Todo API"
    assert set(schema["paths"]["/todos"]) == {"get", "post", "put", "delete"}
    assert "/todos/{todo_id}" in schema["paths"]
    assert {t["name"] for t in schema["tags"]} >= {"health", "todos"}
