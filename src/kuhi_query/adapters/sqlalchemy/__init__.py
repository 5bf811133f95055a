"""SQLAlchemy adapter – predicate compiler, query repository, session factory."""
from kuhi_query.adapters.sqlalchemy.compiler import compile_ordering, compile_predicate, related_source
from kuhi_query.adapters.sqlalchemy.repository import SqlAlchemyQueryRepository
from kuhi_query.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = [
    "SqlAlchemyQueryRepository",
    "SqlAlchemySessionFactory",
    "compile_ordering",
    "compile_predicate",
    "related_source",
]
