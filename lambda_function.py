from typing import Any, Dict
import json
import traceback
import logging
from handlers import HANDLERS
from auth import caller_from_event
from db.database import SessionLocal, session_scope
from errors import EventError

# Set up logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

def _response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'body': json.dumps(body)
    }

def lambda_handler(event, context):
    """Handle both direct Lambda invocations and API Gateway events

    Direct invocations carry the operation, caller and arguments at the top
    level: {'operation': 'create_event', 'user_id': ..., 'title': ...}.
    API Gateway events carry {'operation': ..., 'args': {...}} in a JSON body
    and the caller in the authorizer context.
    """
    try:
        logger.info("Received event: %s", event)
        caller = caller_from_event(event)

        # Check if this is an API Gateway event
        if 'body' in event:
            body = json.loads(event['body'] or '{}')
            logger.info("Parsed API Gateway body: %s", body)
            if not isinstance(body, dict):
                return _response(400, 'Request body must be a JSON object')
            operation = body.get('operation')
            args = body.get('args') or {}
            if not isinstance(args, dict):
                return _response(400, 'args must be a JSON object')
        else:
            operation = event.get('operation')
            args = {k: v for k, v in event.items() if k not in ('operation', 'user_id')}

        if not operation:
            logger.error("No operation found in event")
            return _response(400, 'Operation is required')

        handler = HANDLERS.get(operation)
        if not handler:
            logger.error("No handler found for operation: %s", operation)
            return _response(400, f'Unknown operation: {operation}')

        # Execute the handler inside one transaction
        logger.info("Executing handler for operation: %s", operation)
        with session_scope(SessionLocal) as session:
            result = handler(args, caller, session)
        logger.info("Handler result: %s", result)

        # Ensure body is JSON serialized
        result['body'] = json.dumps(result['body'])
        return result

    except EventError as e:
        logger.warning("%s: %s", type(e).__name__, e.message)
        return _response(e.status_code, e.message)
    except ValueError as e:
        logger.error("ValueError: %s", str(e))
        return _response(400, str(e))
    except Exception as e:
        logger.error("Error details: %s", str(e))
        logger.error("Error type: %s", type(e))
        logger.error("Traceback: %s", traceback.format_exc())
        return _response(500, f'Error: {str(e)}')
