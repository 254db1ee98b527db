"""
MongoDB repositories built on PyMongo's async client.

'MongoStore' owns the 'AsyncMongoClient' for the lifetime of the process: the
application lifespan calls 'connect' on startup (which pings the server and
creates the indexes) and 'close' on shutdown. The repositories it exposes
share that client.

Documents keep the field names of the original service's collections:

    users:         {_id, name, email, password, systemRole}
    conversations: {_id, turnId, userId, role, content, createdAt}

Email uniqueness is enforced by a unique index, so two concurrent
registrations with the same email cannot both succeed. Turns get a
server-generated ObjectId '_id' and are read back sorted by
('createdAt', '_id'), which keeps the user/assistant pair of one request in
write order even when both land in the same millisecond.
"""

from typing import Any

from loguru import logger
from pymongo import ASCENDING, AsyncMongoClient, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from chatbot_service.conversation_database.data_models.turn import Turn, TurnDatabase
from chatbot_service.conversation_database.data_models.user import User, UserDatabase
from chatbot_service.errors import ConflictError, NotFoundError

USERS_COLLECTION = "users"
TURNS_COLLECTION = "conversations"


def _user_to_document(user: User) -> dict[str, Any]:
    return {
        "_id": user.id,
        "name": user.name,
        "email": user.email,
        "password": user.password,
        "systemRole": user.system_role,
    }


def _user_from_document(document: dict[str, Any]) -> User:
    return User(
        id=str(document["_id"]),
        name=document["name"],
        email=document["email"],
        password=document["password"],
        system_role=document.get("systemRole"),
    )


def _turn_to_document(turn: Turn) -> dict[str, Any]:
    return {
        "turnId": turn.id,
        "userId": turn.user_id,
        "role": turn.role.value,
        "content": turn.content,
        "createdAt": turn.create_timestamp,
    }


def _turn_from_document(document: dict[str, Any]) -> Turn:
    return Turn(
        id=document["turnId"],
        user_id=document["userId"],
        role=document["role"],
        content=document["content"],
        create_timestamp=document["createdAt"],
    )


class MongoUserDatabase(UserDatabase):
    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self.collection = collection

    async def create_user(self, user: User) -> User:
        try:
            await self.collection.insert_one(_user_to_document(user))
        except DuplicateKeyError as exc:
            raise ConflictError() from exc
        return user

    async def get_user_by_id(self, user_id: str) -> User | None:
        document = await self.collection.find_one({"_id": user_id})
        return _user_from_document(document) if document else None

    async def get_user_by_email(self, email: str) -> User | None:
        document = await self.collection.find_one({"email": email})
        return _user_from_document(document) if document else None

    async def get_users(self) -> list[User]:
        documents = await self.collection.find({}).sort("_id", ASCENDING).to_list()
        return [_user_from_document(document) for document in documents]

    async def update_system_role(self, user_id: str, system_role: str) -> User:
        document = await self.collection.find_one_and_update(
            {"_id": user_id},
            {"$set": {"systemRole": system_role}},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise NotFoundError(detail=f"User with id {user_id} not found")
        return _user_from_document(document)


class MongoTurnDatabase(TurnDatabase):
    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self.collection = collection

    async def create_turn(self, turn: Turn) -> Turn:
        await self.collection.insert_one(_turn_to_document(turn))
        return turn

    async def get_turns_by_user_id(self, user_id: str) -> list[Turn]:
        cursor = self.collection.find({"userId": user_id}).sort([("createdAt", ASCENDING), ("_id", ASCENDING)])
        return [_turn_from_document(document) for document in await cursor.to_list()]


class MongoStore:
    """
    Process-wide owner of the MongoDB client and its repositories.

    Attributes:
        users: Repository over the 'users' collection.
        turns: Repository over the 'conversations' collection.
    """

    def __init__(self, uri: str, default_database: str = "chatbot") -> None:
        self.client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(uri)
        self.database = self.client.get_default_database(default=default_database)
        self.users = MongoUserDatabase(self.database[USERS_COLLECTION])
        self.turns = MongoTurnDatabase(self.database[TURNS_COLLECTION])

    async def connect(self) -> None:
        await self.client.admin.command("ping")
        await self.database[USERS_COLLECTION].create_index("email", unique=True)
        await self.database[TURNS_COLLECTION].create_index([("userId", ASCENDING), ("createdAt", ASCENDING)])
        logger.info(f"Connected to MongoDB (database={self.database.name!r})")

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB connection closed")
