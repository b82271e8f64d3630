API = "/api/v1"


class TestProjects:
    def test_create_project(self, client):
        """Creating a project returns 201 with the stored fields"""
        response = client.post(f"{API}/projects", json={"name": "P", "color": "#112233"})
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "P"
        assert data["color"] == "#112233"
        assert data["id"]
        assert data["created_at"]

    def test_create_project_default_color(self, client):
        response = client.post(f"{API}/projects", json={"name": "No color"})
        assert response.status_code == 201
        assert response.json()["color"] == "#3B82F6"

    def test_create_project_validation(self, client):
        """Empty name and malformed color are rejected with field-level detail"""
        response = client.post(f"{API}/projects", json={"name": "", "color": "blue"})
        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Validation failed"
        assert "name" in data["errors"]
        assert "color" in data["errors"]

    def test_create_project_name_too_long(self, client):
        response = client.post(f"{API}/projects", json={"name": "x" * 101})
        assert response.status_code == 400
        assert "name" in response.json()["errors"]

    def test_list_projects_newest_first(self, client):
        client.post(f"{API}/projects", json={"name": "First"})
        client.post(f"{API}/projects", json={"name": "Second"})

        response = client.get(f"{API}/projects")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Second", "First"]

    def test_get_project(self, client, test_project):
        response = client.get(f"{API}/projects/{test_project.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "P"

    def test_get_project_not_found(self, client):
        response = client.get(f"{API}/projects/non-existent-id")
        assert response.status_code == 404
        assert response.json()["detail"] == "Project not found"

    def test_update_project(self, client, test_project):
        response = client.put(f"{API}/projects/{test_project.id}", json={"name": "Renamed"})
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["color"] == "#112233"

    def test_update_project_invalid_color(self, client, test_project):
        response = client.put(f"{API}/projects/{test_project.id}", json={"color": "#12345G"})
        assert response.status_code == 400

    def test_update_project_not_found(self, client):
        response = client.put(f"{API}/projects/missing", json={"name": "X"})
        assert response.status_code == 404


class TestProjectDeletion:
    def test_delete_unlinked_project(self, client, test_project):
        response = client.delete(f"{API}/projects/{test_project.id}")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"{API}/projects/{test_project.id}").status_code == 404

    def test_delete_project_with_linked_entries(self, client, test_project, make_entry):
        """Linked entries block deletion with a 409 carrying the entry count"""
        make_entry(test_project, seconds=60)
        make_entry(test_project, task="Other", seconds=30)

        response = client.delete(f"{API}/projects/{test_project.id}")
        assert response.status_code == 409
        data = response.json()
        assert data["entry_count"] == 2
        assert "linked time entries" in data["detail"]
        assert client.get(f"{API}/projects/{test_project.id}").status_code == 200

    def test_delete_project_not_found(self, client):
        response = client.delete(f"{API}/projects/missing")
        assert response.status_code == 404
