"""API surfaces: the gRPC servicer and the HTTP gateway routes."""
