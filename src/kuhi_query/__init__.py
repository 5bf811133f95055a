"""
kuhi_query – query resolution engine for the haiku-monument API.

Import path convention::

    from kuhi_query.application.query import QueryResolver
    from kuhi_query.application.query.catalog import POETS
    from kuhi_query.adapters.sqlalchemy import SqlAlchemyQueryRepository
    from kuhi_query.adapters.fastapi import FastAPIExceptionMapper
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
