"""
entity_dao: data access objects for a document database.

Entities are pydantic models, DAOs hold the persistence lifecycle
(validate, check uniqueness, timestamp, persist, rehydrate) and engines
adapt mongo-like queries to a concrete store.
"""
