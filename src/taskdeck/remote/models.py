"""远程资源数据模型 -- Post / User / Album / Photo / Comment

字段别名与远程 JSON 保持一致（userId、postId 等），
未声明的额外字段保留，不丢弃。
"""

from pydantic import BaseModel, ConfigDict, Field


class _RemoteModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Post(_RemoteModel):
    """帖子"""

    id: int = Field(description="帖子 ID")
    user_id: int | None = Field(default=None, alias="userId", description="作者 ID")
    title: str = Field(default="", description="标题")
    body: str = Field(default="", description="正文")


class Company(_RemoteModel):
    name: str = ""
    catch_phrase: str = Field(default="", alias="catchPhrase")
    bs: str = ""


class User(_RemoteModel):
    """用户"""

    id: int
    name: str = ""
    username: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    company: Company | None = None


class Album(_RemoteModel):
    id: int
    user_id: int | None = Field(default=None, alias="userId")
    title: str = ""


class Photo(_RemoteModel):
    id: int
    album_id: int | None = Field(default=None, alias="albumId")
    title: str = ""
    url: str = ""
    thumbnail_url: str = Field(default="", alias="thumbnailUrl")


class Comment(_RemoteModel):
    id: int
    post_id: int | None = Field(default=None, alias="postId")
    name: str = ""
    email: str = ""
    body: str = ""
