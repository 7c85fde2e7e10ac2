from datetime import datetime

from dentalcare.auth.auth_service import issue_token

TEST_PASSWORD = "secret123"

# 2025-01-01 is a Wednesday
THURSDAY = datetime(2025, 1, 2, 10, 0)
FRIDAY = datetime(2025, 1, 3, 10, 0)
SATURDAY = datetime(2025, 1, 4, 10, 0)
SUNDAY = datetime(2025, 1, 5, 10, 0)
MONDAY = datetime(2025, 1, 6, 10, 0)
WEDNESDAY = datetime(2025, 1, 8, 10, 0)


def auth_headers(user):
    return {"Authorization": f"Bearer {issue_token(user)}"}
