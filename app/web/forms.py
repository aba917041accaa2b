"""Generic CRUD form description shared by every admin page.

Each entity is described once by an ``EntityForm``: its fields, its list
columns, the service class doing the work and the schemas that validate the
submitted values. ``app.web.admin`` renders and processes all of them with the
same list/form templates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    DeliveryType,
    PaymentState,
    SessionState,
    StudentStatus,
    UserRole,
)
from app.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate
from app.schemas.group import GroupCreate, GroupUpdate
from app.schemas.level import LevelCreate, LevelUpdate
from app.schemas.session import SessionCreate, SessionUpdate
from app.schemas.student import StudentCreate, StudentUpdate
from app.schemas.user import UserCreate, UserUpdate
from app.services.catalog_service import GroupService, LevelService, SessionService
from app.services.enrollment_service import EnrollmentService
from app.services.student_service import StudentService
from app.services.user_service import UserService

Choice = Tuple[str, str]
ChoiceLoader = Callable[[AsyncSession], Awaitable[List[Choice]]]


def enum_choices(enum_cls: Type[Enum]) -> List[Choice]:
    return [(member.value, member.value.replace("_", " ").title()) for member in enum_cls]


@dataclass
class FormField:
    """One input of an entity form."""

    name: str
    label: str
    kind: str = "text"
    required: bool = True
    choices: List[Choice] = field(default_factory=list)
    load_choices: Optional[ChoiceLoader] = None
    create_only: bool = False
    edit_only: bool = False
    # Reads the current value from a record for the edit form
    value: Optional[Callable[[Any], Any]] = None
    # Live availability check wired by the template ("username" or "email")
    check: Optional[str] = None

    def initial(self, record: Any) -> str:
        raw = self.value(record) if self.value else getattr(record, self.name, None)
        if raw is None:
            return ""
        if isinstance(raw, Enum):
            return raw.value
        return str(raw)


@dataclass
class EntityForm:
    """Describes list columns, form fields and persistence for one entity."""

    slug: str
    title: str
    singular: str
    fields: List[FormField]
    columns: List[Tuple[str, Callable[[Any], Any]]]
    service: Type
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    upload_field: Optional[str] = None

    def visible_fields(self, creating: bool) -> List[FormField]:
        return [
            f for f in self.fields
            if not (f.create_only and not creating) and not (f.edit_only and creating)
        ]

    async def load_choices(self, db: AsyncSession) -> Dict[str, List[Choice]]:
        choices = {}
        for form_field in self.fields:
            if form_field.load_choices is not None:
                choices[form_field.name] = await form_field.load_choices(db)
            elif form_field.choices:
                choices[form_field.name] = form_field.choices
        return choices

    def initial_values(self, record: Any) -> Dict[str, str]:
        return {f.name: f.initial(record) for f in self.visible_fields(creating=False)}

    def submitted_values(self, form_data: Any, creating: bool) -> Dict[str, str]:
        """Text values from a submitted form, keyed by field name."""
        values = {}
        for form_field in self.visible_fields(creating):
            if form_field.kind == "file":
                continue
            raw = form_data.get(form_field.name)
            values[form_field.name] = raw.strip() if isinstance(raw, str) else ""
        return values

    def parse(self, values: Dict[str, str], creating: bool) -> BaseModel:
        """Validate submitted values with the create or update schema.

        Blank inputs are treated as not provided. Raises pydantic's
        ValidationError on bad input.
        """
        schema = self.create_schema if creating else self.update_schema
        provided = {name: value for name, value in values.items() if value != ""}
        return schema(**provided)

    def label_for(self, name: str) -> str:
        for form_field in self.fields:
            if name in (form_field.name, to_camel(form_field.name)):
                return form_field.label
        return name


def describe_errors(entity: EntityForm, exc: SchemaValidationError) -> str:
    """Human-readable summary of a schema validation failure."""
    parts = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        name = str(loc[0]) if loc else ""
        label = entity.label_for(name) if name else ""
        message = error.get("msg", "invalid value")
        parts.append(f"{label}: {message}" if label else message)
    return "; ".join(parts)


async def _session_choices(db: AsyncSession) -> List[Choice]:
    return [(str(s.id), s.name) for s in await SessionService(db).list()]


async def _level_choices(db: AsyncSession) -> List[Choice]:
    return [
        (str(level.id), f"{level.session.name} / {level.name}")
        for level in await LevelService(db).list()
    ]


async def _group_choices(db: AsyncSession) -> List[Choice]:
    return [
        (str(g.id), f"{g.level.session.name} / {g.level.name} / {g.name}")
        for g in await GroupService(db).list()
    ]


async def _student_choices(db: AsyncSession) -> List[Choice]:
    return [(str(s.id), s.full_name) for s in await StudentService(db).list()]


ENTITY_FORMS: Dict[str, EntityForm] = {
    form.slug: form
    for form in [
        EntityForm(
            slug="sessions",
            title="Sessions",
            singular="session",
            fields=[
                FormField("name", "Name"),
                FormField("start_date", "Start date", kind="date"),
                FormField("end_date", "End date", kind="date"),
                FormField("state", "State", kind="select", choices=enum_choices(SessionState)),
            ],
            columns=[
                ("Name", lambda s: s.name),
                ("Start", lambda s: s.start_date),
                ("End", lambda s: s.end_date),
                ("State", lambda s: s.state.value),
            ],
            service=SessionService,
            create_schema=SessionCreate,
            update_schema=SessionUpdate,
        ),
        EntityForm(
            slug="niveaux",
            title="Levels",
            singular="level",
            fields=[
                FormField("name", "Name"),
                FormField("session_id", "Session", kind="select", load_choices=_session_choices),
            ],
            columns=[
                ("Name", lambda level: level.name),
                ("Session", lambda level: level.session.name),
            ],
            service=LevelService,
            create_schema=LevelCreate,
            update_schema=LevelUpdate,
        ),
        EntityForm(
            slug="groupes",
            title="Groups",
            singular="group",
            fields=[
                FormField("name", "Name"),
                FormField("capacity", "Capacity", kind="number"),
                FormField("delivery_type", "Type", kind="select", choices=enum_choices(DeliveryType)),
                FormField("level_id", "Level", kind="select", load_choices=_level_choices),
            ],
            columns=[
                ("Name", lambda g: g.name),
                ("Capacity", lambda g: g.capacity),
                ("Type", lambda g: g.delivery_type.value),
                ("Level", lambda g: f"{g.level.session.name} / {g.level.name}"),
            ],
            service=GroupService,
            create_schema=GroupCreate,
            update_schema=GroupUpdate,
        ),
        EntityForm(
            slug="students",
            title="Students",
            singular="student",
            fields=[
                FormField("name", "Name"),
                FormField("surname", "Surname"),
                FormField("birth_date", "Birth date", kind="date"),
                FormField("address", "Address", kind="textarea"),
                FormField("national_id", "National ID"),
                FormField("status", "Status", kind="select", choices=enum_choices(StudentStatus)),
                FormField("username", "Username", value=lambda s: s.user.username, check="username"),
                FormField("email", "Email", kind="email", value=lambda s: s.user.email, check="email"),
                FormField("password", "Password", kind="password", create_only=True),
                FormField("photo", "Photo", kind="file", required=False, edit_only=True),
            ],
            columns=[
                ("Name", lambda s: s.full_name),
                ("National ID", lambda s: s.national_id),
                ("Status", lambda s: s.status.value),
                ("Username", lambda s: s.user.username),
            ],
            service=StudentService,
            create_schema=StudentCreate,
            update_schema=StudentUpdate,
            upload_field="photo",
        ),
        EntityForm(
            slug="inscriptions",
            title="Enrollments",
            singular="enrollment",
            fields=[
                FormField("group_id", "Group", kind="select", load_choices=_group_choices),
                FormField("student_id", "Student", kind="select", load_choices=_student_choices),
                FormField(
                    "payment_state", "Payment", kind="select", required=False,
                    choices=enum_choices(PaymentState),
                ),
            ],
            columns=[
                ("Code", lambda e: e.enrollment_code),
                ("Student", lambda e: e.student.full_name),
                ("Group", lambda e: e.group.name),
                ("Payment", lambda e: e.payment_state.value),
            ],
            service=EnrollmentService,
            create_schema=EnrollmentCreate,
            update_schema=EnrollmentUpdate,
        ),
        EntityForm(
            slug="users",
            title="Users",
            singular="user",
            fields=[
                FormField("display_name", "Name"),
                FormField("username", "Username", check="username"),
                FormField("email", "Email", kind="email", check="email"),
                FormField("contact", "Contact", required=False),
                FormField("role", "Role", kind="select", choices=enum_choices(UserRole)),
                FormField("password", "Password", kind="password", create_only=True),
            ],
            columns=[
                ("Name", lambda u: u.display_name),
                ("Username", lambda u: u.username),
                ("Email", lambda u: u.email),
                ("Role", lambda u: u.role.value),
            ],
            service=UserService,
            create_schema=UserCreate,
            update_schema=UserUpdate,
        ),
    ]
}
