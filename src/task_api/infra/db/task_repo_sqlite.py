from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy import Integer, String, Text, DateTime, select, delete
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from task_api.domain.task_models import (
    Task, TaskCreate, TaskFilter, TaskPriority, TaskSort, TaskSortField, SortOrder,
)
from task_api.infra.db.sqlite import Base, storage_session


class UTCDateTime(TypeDecorator):
    """SQLite drops offsets, so store naive UTC and hand back aware UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class TaskRow(Base):
    __tablename__ = "tasks"

    # AUTOINCREMENT keeps deleted ids from being handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(Text, nullable=True, index=True)
    priority: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    deadline: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def apply(self, data: TaskCreate) -> None:
        self.title = data.title
        self.description = data.description
        self.category = data.category
        self.priority = data.priority.value
        self.deadline = data.deadline

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            priority=TaskPriority(self.priority),
            deadline=self.deadline,
            created_at=self.created_at,
        )


SORT_COLUMNS = {
    TaskSortField.id: TaskRow.id,
    TaskSortField.title: TaskRow.title,
    TaskSortField.description: TaskRow.description,
    TaskSortField.category: TaskRow.category,
    TaskSortField.priority: TaskRow.priority,
    TaskSortField.deadline: TaskRow.deadline,
    TaskSortField.created_at: TaskRow.created_at,
}


class SQLiteTaskRepo:
    def __init__(self, sessionmaker):
        self.sessionmaker = sessionmaker

    async def create(self, data: TaskCreate) -> Task:
        row = TaskRow(created_at=datetime.now(timezone.utc))
        row.apply(data)
        async with storage_session(self.sessionmaker) as session:
            session.add(row)
            await session.commit()
            return row.to_domain()

    async def get(self, task_id: int) -> Optional[Task]:
        async with storage_session(self.sessionmaker) as session:
            row = await session.get(TaskRow, task_id)
            return row.to_domain() if row else None

    async def list(self, filters: TaskFilter, sort: TaskSort) -> List[Task]:
        stmt = select(TaskRow)
        if filters.category:
            stmt = stmt.where(TaskRow.category == filters.category)
        if filters.priority:
            stmt = stmt.where(TaskRow.priority == filters.priority.value)
        if filters.deadline_from:
            stmt = stmt.where(TaskRow.deadline >= filters.deadline_from)
        if filters.deadline_to:
            stmt = stmt.where(TaskRow.deadline <= filters.deadline_to)

        column = SORT_COLUMNS[sort.field]
        order = column.desc() if sort.order == SortOrder.desc else column.asc()
        stmt = stmt.order_by(order, TaskRow.id.asc())

        async with storage_session(self.sessionmaker) as session:
            res = await session.execute(stmt)
            rows = res.scalars().all()
            return [r.to_domain() for r in rows]

    async def update(self, task_id: int, data: TaskCreate) -> Optional[Task]:
        async with storage_session(self.sessionmaker) as session:
            row = await session.get(TaskRow, task_id)
            if row is None:
                return None
            row.apply(data)
            await session.commit()
            return row.to_domain()

    async def delete(self, task_id: int) -> bool:
        async with storage_session(self.sessionmaker) as session:
            res = await session.execute(delete(TaskRow).where(TaskRow.id == task_id))
            await session.commit()
            return res.rowcount > 0
