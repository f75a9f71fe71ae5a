"""Calculator microservice: arithmetic over HTTP with request/response audit logging."""
