from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class MenuInput(BaseModel):
    """Menu node payload used when creating a menu and its submenus."""

    name: str = Field(..., min_length=1, max_length=128, json_schema_extra={"example": "Staff Roster"})
    icon: str = Field(default="", max_length=64, json_schema_extra={"example": "mdi-calendar"})
    path: str = Field(default="", max_length=256, json_schema_extra={"example": "/roster"})
    group_title: bool = Field(default=False, validation_alias=AliasChoices("group_title", "groupTitle"))
    parent_id: int | None = Field(default=None, validation_alias=AliasChoices("parent_id", "parentId"))
    order: int | None = Field(default=None, ge=0)


class MenuPatch(BaseModel):
    """
    Partial menu update.

    Only fields present in the request are applied. For ``parent_id`` an
    explicit ``null`` moves the node to the root, while omitting the field
    keeps the current parent.
    """

    id: int | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str | None = Field(default=None, min_length=1, max_length=128)
    icon: str | None = Field(default=None, max_length=64)
    path: str | None = Field(default=None, max_length=256)
    group_title: bool | None = Field(default=None, validation_alias=AliasChoices("group_title", "groupTitle"))
    parent_id: int | None = Field(default=None, validation_alias=AliasChoices("parent_id", "parentId"))
    order: int | None = Field(default=None, ge=0)
    is_active: bool | None = Field(default=None, validation_alias=AliasChoices("is_active", "isActive"))


class CreateMenuRequest(BaseModel):
    """Create a parent menu with an optional batch of submenus."""

    parent: MenuInput
    children: list[MenuInput] = Field(default_factory=list, validation_alias=AliasChoices("children", "submenus"))


class UpdateMenuRequest(BaseModel):
    """Update a menu and reconcile its submenus against ``children``."""

    parent: MenuPatch = Field(default_factory=MenuPatch)
    children: list[MenuPatch] = Field(default_factory=list, validation_alias=AliasChoices("children", "submenus"))

    @model_validator(mode="after")
    def _new_children_need_a_name(self):
        for child in self.children:
            if child.id is None and not child.name:
                raise ValueError("new submenus must have a name")
        return self


class DeleteManyMenusRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)


class MenuTreeNode(BaseModel):
    """A menu node together with its ordered children."""

    id: int
    key: str | None = None
    name: str
    icon: str | None = ""
    path: str | None = ""
    parent_id: int | None = None
    order: int | None = 0
    level: int | None = 0
    group_title: bool | None = False
    is_active: bool | None = True
    children: list["MenuTreeNode"] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MenuItemSchema(BaseModel):
    """Flat menu row as shown in the admin list, with the parent's name for display."""

    id: int
    key: str
    name: str
    icon: str
    path: str
    parent_id: int | None
    parent_name: str | None = None
    order: int
    level: int
    group_title: bool
    is_active: bool
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class MenuListResponse(BaseModel):
    data: list[MenuItemSchema]
    pagination: Pagination


class MenuHierarchyResponse(BaseModel):
    data: list[MenuTreeNode]
    pagination: Pagination


class MenuMutationResponse(BaseModel):
    """Result of a create/update: a message and the rebuilt full hierarchy."""

    message: str
    data: list[MenuTreeNode]


class DeleteMenuResponse(BaseModel):
    message: str
    deleted_children: int


class DeleteManyMenusResponse(BaseModel):
    deleted_count: int
