from .models import DEFAULT_ADMIN, AdminUser, CompanySettings, UserRole

__all__ = ["AdminUser", "CompanySettings", "UserRole", "DEFAULT_ADMIN"]
