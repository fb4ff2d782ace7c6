from user_directory.dao.user_dao import UserDAO

__all__ = [
    "UserDAO",
]
