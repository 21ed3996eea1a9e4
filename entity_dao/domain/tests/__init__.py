"""
Domain tests for entity_dao.

Besides the tests, this package holds the factory_boy factories shared by
the test suites of the other layers.
"""
