import uuid
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from app.models.task import Task, TaskStatus


class TestE2E:
    def test_complete_task_journey(self, client: TestClient, db: Session):
        # 1. Register the owner and the assignee
        email = f"owner_{uuid.uuid4().hex[:8]}@example.com"
        password = "SecurePass123!"

        r = client.post("/auth/register", json={"name": "owner", "password": password})
        assert r.status_code == 400

        r = client.post("/auth/register", json={"name": "owner", "email": email, "password": password})
        assert r.status_code == 201
        owner = r.json()["data"]

        r = client.post("/auth/register", json={
            "name": "worker",
            "email": f"worker_{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
        })
        worker = r.json()["data"]

        # 2. Log in
        r = client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200
        headers = {"Authorization": f"Bearer {r.json()['token']}"}

        # 3. Create, assign and progress a task
        r = client.post("/tasks/register", json={
            "title": "Migrate database",
            "description": "Move to managed Postgres",
            "category": "high",
            "assignTo": worker["_id"],
        }, headers=headers)
        assert r.status_code == 201
        task_id = r.json()["data"]["_id"]

        r = client.patch(f"/tasks/status/{task_id}", json={"status": "In Process"}, headers=headers)
        assert r.status_code == 200

        r = client.patch(f"/tasks/update/{task_id}", json={"description": "Move to managed Postgres 16"}, headers=headers)
        assert r.status_code == 200
        assert r.json()["data"]["status"] == "In Process"

        stored = db.get(Task, task_id)
        assert stored.status == TaskStatus.IN_PROCESS
        assert stored.created_by == owner["_id"]
        assert stored.assign_to == worker["_id"]

        # 4. Listing shows it with names resolved
        r = client.get("/tasks/getTasks", params={"filters[status]": "In Process"}, headers=headers)
        data = r.json()["data"]
        assert [t["_id"] for t in data] == [task_id]
        assert data[0]["assignTo"]["name"] == "worker"

        # 5. Delete and confirm it is gone
        r = client.delete(f"/tasks/delete/{task_id}", headers=headers)
        assert r.status_code == 200
        r = client.get("/tasks/getTasks", headers=headers)
        assert r.json()["data"] == []
