from hostel_admin.repositories.base.base_repository import BaseRepository
from hostel_admin.repositories.base.pagination import PageInfo, PaginatedResult, paginate

__all__ = ["BaseRepository", "PageInfo", "PaginatedResult", "paginate"]
