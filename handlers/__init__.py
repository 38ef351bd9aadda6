from .event_handlers import (
    handle_create_event,
    handle_get_user_events,
    handle_update_event,
    handle_delete_event,
    handle_get_event_details,
    handle_sync_user
)

# Map operations to their handlers
HANDLERS = {
    'create_event': handle_create_event,
    'get_user_events': handle_get_user_events,
    'update_event': handle_update_event,
    'delete_event': handle_delete_event,
    'get_event_details': handle_get_event_details,
    'sync_user': handle_sync_user
}
