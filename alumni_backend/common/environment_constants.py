DATABASE_URL = "DATABASE_URL"
LOG_LEVEL = "LOG_LEVEL"
JWT_SECRET = "JWT_SECRET"
JWT_ALGORITHM = "JWT_ALGORITHM"
ACCESS_TOKEN_EXPIRE_MINUTES = "ACCESS_TOKEN_EXPIRE_MINUTES"
