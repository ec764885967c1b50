class DatabaseError(Exception):
    """Base class for every failure coming out of the data gateway."""


class DatabaseConnectionError(DatabaseError):
    pass


class QueryError(DatabaseError):
    pass


class DuplicateKeyError(QueryError):
    pass


class QueryTimeoutError(DatabaseError):
    pass


class PoolExhaustedError(DatabaseError):
    pass


class NotFoundError(Exception):
    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class UpstreamFetchError(Exception):
    pass
