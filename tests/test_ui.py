import httpx
import pytest

from todo_api.ui import FilterMode, TodoApiClient, TodoCounts, TodoListState


@pytest.fixture
def state(client):
    return TodoListState(TodoApiClient(client))


def seed(client, *titles):
    return [client.post("/todos", json={"title": t}).json()["data"] for t in titles]


def offline_state(handler):
    http = httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(handler))
    return TodoListState(TodoApiClient(http))


def unreachable(request):
    raise httpx.ConnectError("connection refused", request=request)


def server_error(request):
    return httpx.Response(500, json={"success": False, "error": "Internal"})


class TestLoad:
    def test_starts_loading(self, state):
        assert state.loading is True
        assert state.todos == []

    def test_load_mirrors_server(self, client, state):
        seeded = seed(client, "A", "B")
        state.load()
        assert state.loading is False
        assert state.error == ""
        assert state.todos == seeded

    def test_load_transport_error(self):
        state = offline_state(unreachable)
        state.load()
        assert state.loading is False
        assert state.error == "Error fetching todos"
        assert state.todos == []

    def test_load_failure_envelope(self):
        state = offline_state(server_error)
        state.load()
        assert state.loading is False
        assert state.error == "Failed to fetch todos"


class TestAdd:
    def test_add_prepends_and_clears_input(self, client, state):
        seed(client, "Existing")
        state.load()
        state.error = "stale"
        state.new_todo = "Buy milk"
        state.add()
        assert [t["title"] for t in state.todos] == ["Buy milk", "Existing"]
        assert state.new_todo == ""
        assert state.error == ""

    def test_blank_input_is_ignored(self, client, state):
        state.new_todo = "   "
        state.add()
        assert state.todos == []
        assert client.get("/todos").json()["data"] == []

    def test_server_error_message_is_shown(self, state):
        state.new_todo = "x" * 101
        state.add()
        assert state.error == "Title must be less than 100 characters"
        assert state.new_todo == "x" * 101
        assert state.todos == []

    def test_generic_failure_message(self):
        state = offline_state(server_error)
        state.new_todo = "Anything"
        state.add()
        assert state.error == "Failed to add todo"

    def test_transport_error(self):
        state = offline_state(unreachable)
        state.new_todo = "Anything"
        state.add()
        assert state.error == "Error adding todo"
        assert state.todos == []


class TestToggle:
    def test_toggle_replaces_record_and_selection(self, client, state):
        a, b = seed(client, "A", "B")
        state.load()
        state.select(a["id"])
        state.toggle(a["id"])
        assert state.todos[0]["completed"] is True
        assert state.todos[1] == b
        assert state.selected == state.todos[0]

        state.toggle(a["id"])
        assert state.todos[0]["completed"] is False

    def test_toggle_missing_on_server(self, client, state):
        (a,) = seed(client, "A")
        state.load()
        client.delete("/todos", params={"id": a["id"]})
        state.toggle(a["id"])
        assert state.error == "Failed to update todo"
        assert state.todos == [a]

    def test_toggle_transport_error(self):
        state = offline_state(unreachable)
        todo = {"id": "1", "title": "A", "completed": False, "createdAt": "2025-01-01T00:00:00Z"}
        state.todos = [todo]
        state.toggle("1")
        assert state.error == "Error updating todo"
        assert state.todos == [todo]


class TestDelete:
    def test_delete_removes_and_clears_selection(self, client, state):
        a, b = seed(client, "A", "B")
        state.load()
        state.select(a["id"])
        state.delete(a["id"])
        assert state.todos == [b]
        assert state.selected is None

    def test_delete_keeps_other_selection(self, client, state):
        a, b = seed(client, "A", "B")
        state.load()
        state.select(b["id"])
        state.delete(a["id"])
        assert state.selected == b

    def test_delete_failure(self, client, state):
        (a,) = seed(client, "A")
        state.load()
        client.delete("/todos", params={"id": a["id"]})
        state.delete(a["id"])
        assert state.error == "Failed to delete todo"
        assert state.todos == [a]

    def test_delete_transport_error(self):
        state = offline_state(unreachable)
        state.delete("1")
        assert state.error == "Error deleting todo"


class TestSelection:
    def test_select_and_deselect(self, client, state):
        (a,) = seed(client, "A")
        state.load()
        state.select(a["id"])
        assert state.selected == a
        state.deselect()
        assert state.selected is None


def make_todo(todo_id, title, completed):
    return {"id": todo_id, "title": title, "completed": completed, "createdAt": "2025-01-01T00:00:00Z"}


class TestFiltering:
    @pytest.fixture
    def local(self, state):
        state.todos = [
            make_todo("1", "Buy milk", False),
            make_todo("2", "Buy MILK chocolate", True),
            make_todo("3", "Walk dog", False),
            make_todo("4", "Oat milk latte", False),
        ]
        return state

    def test_all_visible_by_default(self, local):
        assert [t["id"] for t in local.visible_todos] == ["1", "2", "3", "4"]

    def test_filter_modes(self, local):
        local.set_filter("active")
        assert [t["id"] for t in local.visible_todos] == ["1", "3", "4"]
        local.set_filter(FilterMode.COMPLETED)
        assert [t["id"] for t in local.visible_todos] == ["2"]

    def test_search_with_active_filter(self, local):
        local.set_filter(FilterMode.ACTIVE)
        local.search_term = "Milk"
        assert [t["id"] for t in local.visible_todos] == ["1", "4"]

    def test_counts_ignore_filter_and_search(self, local):
        local.set_filter(FilterMode.COMPLETED)
        local.search_term = "dog"
        assert local.counts == TodoCounts(total=4, active=3, completed=1)

    def test_unknown_filter_rejected(self, local):
        with pytest.raises(ValueError):
            local.set_filter("done")

    def test_empty_message(self, local):
        assert local.empty_message == "Add a new todo to get started!"
        local.search_term = "nothing"
        assert local.visible_todos == []
        assert local.empty_message == "Try adjusting your search."
