"""
Service layer.

Services hold the business logic and talk to MongoDB through the
``DocumentStore`` they are constructed with.  API handlers only map
their results and errors onto HTTP responses.
"""
