"""HTTP status codes used by the core API."""

HTTP_200_OK = 200
HTTP_201_CREATED = 201

HTTP_400_BAD_REQUEST = 400
HTTP_401_UNAUTHORIZED = 401
HTTP_404_NOT_FOUND = 404
HTTP_409_CONFLICT = 409
HTTP_413_REQUEST_ENTITY_TOO_LARGE = 413
HTTP_429_TOO_MANY_REQUESTS = 429

HTTP_500_INTERNAL_SERVER_ERROR = 500
