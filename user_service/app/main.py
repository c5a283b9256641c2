
import logging
from typing import List

import uvicorn
from fastapi import Depends, Request, Response

from common.app import create_app
from common.errors import error_response
from common.models import User
from user_service.app.config import CORS_ORIGIN, LOG_LEVEL, PORT
from user_service.app.models import UserCreateRequest, UserUpdateRequest
from user_service.app.store import UserStore, get_store

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("user_service")

app = create_app(
    "user-api",
    title="User API",
    description="Customers and their loyalty tiers",
    cors_origin=CORS_ORIGIN,
)


@app.get("/users", response_model=List[User])
def list_users(users: UserStore = Depends(get_store)):
    return users.list()


@app.get("/users/{user_id}", response_model=User)
def get_user(request: Request, user_id: str, users: UserStore = Depends(get_store)):
    user = users.find_by_id(user_id)
    if user is None:
        logger.info(f"User {user_id} not found, correlation {request.state.correlation_id}")
        return error_response("USER_NOT_FOUND", f"User with id '{user_id}' not found", 404)
    return user


@app.post("/users", response_model=User, status_code=201)
def create_user(request: Request, body: UserCreateRequest, users: UserStore = Depends(get_store)):
    logger.info(f"Create user {body.id} ({body.loyalty_tier}), correlation {request.state.correlation_id}")
    return users.create(body)


@app.put("/users/{user_id}", response_model=User)
def update_user(request: Request, user_id: str, body: UserUpdateRequest, users: UserStore = Depends(get_store)):
    changes = body.model_dump(exclude_none=True)
    if not changes:
        return error_response("INVALID_PAYLOAD", "At least one of name or loyaltyTier must be provided", 400)
    logger.info(f"Update user {user_id}, correlation {request.state.correlation_id}")
    return users.update(user_id, changes)


@app.delete("/users/{user_id}", status_code=204)
def delete_user(request: Request, user_id: str, users: UserStore = Depends(get_store)):
    users.delete(user_id)
    logger.info(f"Deleted user {user_id}, correlation {request.state.correlation_id}")
    return Response(status_code=204)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
