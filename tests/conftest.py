from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from drawledger import database
from drawledger.main import app
from drawledger.models.draw_request import DrawRequest, DrawRequestCreate, STATUS_PENDING
from drawledger.models.project import Project, ProjectCreate
from drawledger.store.base import (
    DrawRequestRepository,
    ProjectRepository,
    Store,
    StoreError,
)

BASE_TIME = datetime(2024, 3, 1, tzinfo=timezone.utc)


class _Clock:
    def __init__(self) -> None:
        self.ticks = 0

    def now(self) -> datetime:
        self.ticks += 1
        return BASE_TIME + timedelta(minutes=self.ticks)


class FakeProjectRepository(ProjectRepository):
    def __init__(self, clock: _Clock) -> None:
        self.rows: list[Project] = []
        self.clock = clock
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreError("projects unavailable")

    async def fetch_all(self) -> list[Project]:
        self._check()
        return sorted(self.rows, key=lambda p: p.created_at, reverse=True)

    async def get(self, project_id: str) -> Optional[Project]:
        self._check()
        return next((p for p in self.rows if p.id == project_id), None)

    async def insert(self, data: ProjectCreate) -> Project:
        self._check()
        project = Project(
            id=str(uuid.uuid4()),
            name=data.name,
            total_budget=data.total_budget,
            status=data.status,
            created_at=self.clock.now(),
        )
        self.rows.append(project)
        return project

    def add(self, project_id: str, **fields) -> Project:
        project = Project(id=project_id, created_at=self.clock.now(), **fields)
        self.rows.append(project)
        return project


class FakeDrawRequestRepository(DrawRequestRepository):
    def __init__(self, clock: _Clock, projects: FakeProjectRepository) -> None:
        self.rows: list[DrawRequest] = []
        self.clock = clock
        self.projects = projects
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreError("payments unavailable")

    def _joined(self, draw: DrawRequest) -> DrawRequest:
        project = next((p for p in self.projects.rows if p.id == draw.project_id), None)
        return draw.model_copy(update={"project_name": project.name if project else None})

    async def fetch_all(self) -> list[DrawRequest]:
        self._check()
        rows = sorted(self.rows, key=lambda d: d.created_at, reverse=True)
        return [self._joined(d) for d in rows]

    async def get(self, draw_id: str) -> Optional[DrawRequest]:
        self._check()
        draw = next((d for d in self.rows if d.id == draw_id), None)
        return self._joined(draw) if draw else None

    async def insert(self, data: DrawRequestCreate) -> DrawRequest:
        self._check()
        draw = DrawRequest(
            id=str(uuid.uuid4()),
            project_id=data.project_id,
            description=data.description,
            amount=data.amount,
            status=STATUS_PENDING,
            created_at=self.clock.now(),
        )
        self.rows.append(draw)
        return self._joined(draw)

    async def update_status(self, draw_id: str, expected: str, new: str) -> Optional[DrawRequest]:
        self._check()
        for index, draw in enumerate(self.rows):
            if draw.id == draw_id and draw.status == expected:
                self.rows[index] = draw.model_copy(update={"status": new})
                return self._joined(self.rows[index])
        return None

    def add(self, draw_id: str, project_id: str, **fields) -> DrawRequest:
        draw = DrawRequest(
            id=draw_id, project_id=project_id, created_at=self.clock.now(), **fields
        )
        self.rows.append(draw)
        return draw


@pytest.fixture()
def fake_store(monkeypatch: pytest.MonkeyPatch) -> Store:
    clock = _Clock()
    projects = FakeProjectRepository(clock)
    store = Store(
        projects=projects,
        draw_requests=FakeDrawRequestRepository(clock, projects),
        backend="fake",
    )
    monkeypatch.setattr(database, "store", store)
    return store


@pytest.fixture()
def client(fake_store: Store) -> TestClient:
    # 不进入 lifespan，避免连接真实后端
    return TestClient(app)


