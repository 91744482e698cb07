"""
Dependency Injection Container

Builds one application context: settings, record store, shared collection
caches, the auth session and the use cases that read them. Nothing here is a
module-level singleton; each container owns its own instances.
"""

import logging
from typing import Any, Dict, Optional

from viandas.application.use_cases.crm_use_cases import (
    CustomerManagementUseCase,
    FollowupManagementUseCase,
    MealCatalogUseCase,
)
from viandas.application.use_cases.dashboard_use_case import DashboardUseCase
from viandas.application.use_cases.order_creation_use_case import OrderCreationUseCase
from viandas.application.use_cases.order_management_use_case import (
    OrderManagementUseCase,
)
from viandas.domain.repositories.customer_repository import CustomerRepository
from viandas.domain.repositories.followup_repository import FollowupRepository
from viandas.domain.repositories.meal_repository import MealRepository
from viandas.domain.repositories.order_repository import OrderRepository
from viandas.domain.repositories.profile_repository import ProfileRepository
from viandas.domain.services.clock import Clock, now_in
from viandas.domain.services.followup_scheduler import FollowupScheduler
from viandas.infrastructure.auth.auth_service import AuthService
from viandas.infrastructure.cache.read_through_cache import ReadThroughCache
from viandas.infrastructure.configuration.config import Settings, get_config
from viandas.infrastructure.database.operations import DatabaseManager
from viandas.infrastructure.repositories.sqlalchemy_customer_repository import (
    SQLAlchemyCustomerRepository,
)
from viandas.infrastructure.repositories.sqlalchemy_followup_repository import (
    SQLAlchemyFollowupRepository,
)
from viandas.infrastructure.repositories.sqlalchemy_meal_repository import (
    SQLAlchemyMealRepository,
)
from viandas.infrastructure.repositories.sqlalchemy_order_repository import (
    SQLAlchemyOrderRepository,
)
from viandas.infrastructure.repositories.sqlalchemy_profile_repository import (
    SQLAlchemyProfileRepository,
)

CACHE_NAMES = ("meals", "customers", "orders", "followups")


class DependencyContainer:
    """
    Dependency injection container for one application context

    Manages the instantiation and lifecycle of:
    - Repositories (Infrastructure layer)
    - Shared collection caches and the auth session
    - Use Cases (Application layer)
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        database_manager: Optional[DatabaseManager] = None,
        clock: Optional[Clock] = None,
    ):
        self._config = config or get_config()
        self._database = database_manager or DatabaseManager(self._config)
        self._clock = clock or (lambda: now_in(self._config.tzinfo))
        self._instances: Dict[str, Any] = {}
        self._logger = logging.getLogger(self.__class__.__name__)
        self._setup_dependencies()

    def _setup_dependencies(self):
        """Setup all dependencies and their relationships"""
        self._logger.info("Setting up dependency injection container...")

        self._register_repositories()
        self._register_caches()
        self._register_services()
        self._register_use_cases()

        self._logger.info("Dependency injection container setup complete")

    def _register_repositories(self):
        """Register repository implementations"""
        self._instances["meal_repository"] = SQLAlchemyMealRepository(self._database)
        self._instances["customer_repository"] = SQLAlchemyCustomerRepository(self._database)
        self._instances["order_repository"] = SQLAlchemyOrderRepository(self._database)
        self._instances["followup_repository"] = SQLAlchemyFollowupRepository(self._database)
        self._instances["profile_repository"] = SQLAlchemyProfileRepository(self._database)

        self._logger.debug("Repositories registered successfully")

    def _register_caches(self):
        """One read-through cache per shared collection"""
        ttl = self._config.cache_ttl_seconds
        loaders = {
            "meals": self.get_meal_repository().find_all,
            "customers": self.get_customer_repository().find_all,
            "orders": self.get_order_repository().get_all_orders,
            "followups": self.get_followup_repository().find_all,
        }
        for name in CACHE_NAMES:
            self._instances[f"{name}_cache"] = ReadThroughCache(name, loaders[name], ttl=ttl)

        self._logger.debug("Caches registered successfully")

    def _register_services(self):
        """Register service implementations"""
        self._instances["auth_service"] = AuthService(self.get_profile_repository())
        self._instances["followup_scheduler"] = FollowupScheduler(
            self.get_followup_repository()
        )

        self._logger.debug("Services registered successfully")

    def _register_use_cases(self):
        """Register use case implementations with their dependencies"""
        self._instances["order_creation_use_case"] = OrderCreationUseCase(
            order_repository=self.get_order_repository(),
            customer_repository=self.get_customer_repository(),
            followup_scheduler=self.get_followup_scheduler(),
            auth_service=self.get_auth_service(),
            price_table=self._config.price_table(),
            clock=self._clock,
            orders_cache=self.get_cache("orders"),
            customers_cache=self.get_cache("customers"),
            followups_cache=self.get_cache("followups"),
        )

        self._instances["order_management_use_case"] = OrderManagementUseCase(
            order_repository=self.get_order_repository(),
            orders_cache=self.get_cache("orders"),
            auth_service=self.get_auth_service(),
            clock=self._clock,
        )

        self._instances["customer_management_use_case"] = CustomerManagementUseCase(
            customer_repository=self.get_customer_repository(),
            customers_cache=self.get_cache("customers"),
            auth_service=self.get_auth_service(),
            clock=self._clock,
        )

        self._instances["meal_catalog_use_case"] = MealCatalogUseCase(
            meal_repository=self.get_meal_repository(),
            meals_cache=self.get_cache("meals"),
            auth_service=self.get_auth_service(),
            clock=self._clock,
        )

        self._instances["followup_management_use_case"] = FollowupManagementUseCase(
            followup_repository=self.get_followup_repository(),
            followups_cache=self.get_cache("followups"),
            clock=self._clock,
        )

        self._instances["dashboard_use_case"] = DashboardUseCase(
            orders_cache=self.get_cache("orders"),
            customers_cache=self.get_cache("customers"),
            followups_cache=self.get_cache("followups"),
            clock=self._clock,
        )

        self._logger.debug("Use cases registered successfully")

    @property
    def config(self) -> Settings:
        return self._config

    @property
    def database(self) -> DatabaseManager:
        return self._database

    # Repository getters
    def get_meal_repository(self) -> MealRepository:
        return self._instances["meal_repository"]

    def get_customer_repository(self) -> CustomerRepository:
        return self._instances["customer_repository"]

    def get_order_repository(self) -> OrderRepository:
        return self._instances["order_repository"]

    def get_followup_repository(self) -> FollowupRepository:
        return self._instances["followup_repository"]

    def get_profile_repository(self) -> ProfileRepository:
        return self._instances["profile_repository"]

    # Cache and service getters
    def get_cache(self, name: str) -> ReadThroughCache:
        """Shared cache for 'meals', 'customers', 'orders' or 'followups'"""
        return self._instances[f"{name}_cache"]

    def get_auth_service(self) -> AuthService:
        return self._instances["auth_service"]

    def get_followup_scheduler(self) -> FollowupScheduler:
        return self._instances["followup_scheduler"]

    # Use Case getters
    def get_order_creation_use_case(self) -> OrderCreationUseCase:
        return self._instances["order_creation_use_case"]

    def get_order_management_use_case(self) -> OrderManagementUseCase:
        return self._instances["order_management_use_case"]

    def get_customer_management_use_case(self) -> CustomerManagementUseCase:
        return self._instances["customer_management_use_case"]

    def get_meal_catalog_use_case(self) -> MealCatalogUseCase:
        return self._instances["meal_catalog_use_case"]

    def get_followup_management_use_case(self) -> FollowupManagementUseCase:
        return self._instances["followup_management_use_case"]

    def get_dashboard_use_case(self) -> DashboardUseCase:
        return self._instances["dashboard_use_case"]

    def invalidate_caches(self) -> None:
        """Drop every collection snapshot"""
        for name in CACHE_NAMES:
            self.get_cache(name).invalidate()

    def get_cache_stats(self) -> Dict[str, Dict[str, Any]]:
        return {name: self.get_cache(name).get_stats() for name in CACHE_NAMES}

    def cleanup(self):
        """Sign out, drop caches and release the database connections"""
        self._logger.info("Cleaning up dependency container...")
        self.get_auth_service().sign_out()
        self.invalidate_caches()
        self._database.dispose()
        self._instances.clear()
        self._logger.info("Dependency container cleanup complete")
