from fastapi import APIRouter, BackgroundTasks, Depends, Request

from auth import get_current_admin
from database import Database, contact_messages, get_db
from logger import get_logger
from notifier import EmailNotifier
from resources import ResourceDefinition, build_resource_router
from schemas import DEFAULT_CONTACT_SUBJECT, ContactFlags, ContactMessageCreate

logger = get_logger(__name__)

# admins never rewrite what the sender wrote, only the read/replied flags
CONTACT = ResourceDefinition(
    "contact",
    contact_messages,
    ContactMessageCreate,
    "Contact message",
    [("created_at", True)],
    private_reads=True,
    update_schema=ContactFlags,
)


def get_notifier(request: Request) -> EmailNotifier:
    return request.app.state.notifier


def contact_router() -> APIRouter:
    router = APIRouter(prefix=CONTACT.prefix, tags=[CONTACT.name])

    @router.post("", status_code=201)
    def send_message(
        payload: ContactMessageCreate,
        background_tasks: BackgroundTasks,
        db: Database = Depends(get_db),
        notifier: EmailNotifier = Depends(get_notifier),
    ):
        values = payload.model_dump()
        values["subject"] = values["subject"] or DEFAULT_CONTACT_SUBJECT
        row = db.create_row(contact_messages, {**values, "read": False, "replied": False})
        logger.info(f"Stored contact message {row['id']} from {row['sender_email']}")
        # runs after the response; the stored row is never rolled back
        background_tasks.add_task(notifier.notify_new_message, row)
        return {"success": True, "message": "Message sent", "data": row}

    @router.put("/{id}/read")
    def mark_as_read(id: int, db: Database = Depends(get_db), _: dict = Depends(get_current_admin)):
        row = db.update_row(contact_messages, id, {"read": True})
        return {"message": "Contact message marked as read", "data": row}

    return build_resource_router(CONTACT, router, include_create=False)
