"""Task Domain Model

单条待办记录。持久化格式使用 camelCase 字段名（dueDate / createdAt），
Python 侧使用 snake_case 属性。
"""

from datetime import UTC, date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import DEFAULT_CATEGORY, Category


def _to_aware(value: datetime) -> datetime:
    """naive datetime 视为 UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Task(BaseModel):
    """Task 数据模型

    记录本身不可变（frozen），修改一律通过 model_copy 生成新记录，
    因此 TaskStore 对外暴露的快照不会被调用方意外改写。
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="唯一标识，ULID 格式")
    text: str = Field(description="显示文本（已去除首尾空白）")
    completed: bool = Field(default=False, description="是否已完成")
    category: Category = Field(default=DEFAULT_CATEGORY, description="分类")
    due_date: datetime | None = Field(
        default=None,
        alias="dueDate",
        description="截止时间，None 表示没有截止时间",
    )
    created_at: datetime = Field(alias="createdAt", description="创建时间")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text 不能为空白")
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _date_to_datetime(cls, value: object) -> object:
        # 日期选择器可能只给出日历日期
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min, tzinfo=UTC)
        return value

    @field_validator("due_date", "created_at")
    @classmethod
    def _ensure_aware(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return _to_aware(value)
