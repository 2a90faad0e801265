"""
存储层抽象接口
仪表盘只通过这里定义的窄接口访问远端数据，不依赖具体的网络客户端
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from drawledger.models.project import Project, ProjectCreate
from drawledger.models.draw_request import DrawRequest, DrawRequestCreate

PROJECTS_TABLE = "projects"
DRAW_REQUESTS_TABLE = "payments"

ModelT = TypeVar("ModelT", bound=BaseModel)


class StoreError(Exception):
    """存储后端读写失败（对调用方不透明）"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


def decode_row(model: type[ModelT], row: dict) -> ModelT:
    """把后端返回的行解析为模型，数据不合法时转换为 StoreError"""
    try:
        return model.model_validate(row)
    except ValidationError as e:
        raise StoreError(f"{model.__name__} 数据无法解析: {e.error_count()} 个字段不合法") from e


class ProjectRepository(ABC):
    """项目仓储"""

    @abstractmethod
    async def fetch_all(self) -> list[Project]:
        """获取全部项目，按创建时间倒序"""
        ...

    @abstractmethod
    async def get(self, project_id: str) -> Optional[Project]:
        ...

    @abstractmethod
    async def insert(self, data: ProjectCreate) -> Project:
        ...


class DrawRequestRepository(ABC):
    """付款申请仓储"""

    @abstractmethod
    async def fetch_all(self) -> list[DrawRequest]:
        """获取全部付款申请，按创建时间倒序，附带所属项目名称"""
        ...

    @abstractmethod
    async def get(self, draw_id: str) -> Optional[DrawRequest]:
        ...

    @abstractmethod
    async def insert(self, data: DrawRequestCreate) -> DrawRequest:
        """新建付款申请，状态固定为 Pending"""
        ...

    @abstractmethod
    async def update_status(
        self, draw_id: str, expected: str, new: str
    ) -> Optional[DrawRequest]:
        """
        条件更新状态：仅当当前状态等于 expected 时写入 new

        Returns:
            更新后的记录；没有记录匹配时返回 None
        """
        ...


@dataclass
class Store:
    """一个后端的全部仓储"""
    projects: ProjectRepository
    draw_requests: DrawRequestRepository
    backend: str = ""
