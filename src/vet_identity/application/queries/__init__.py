from vet_identity.application.queries.get_user_by_id_query import GetUserByIdQuery

__all__ = ["GetUserByIdQuery"]
