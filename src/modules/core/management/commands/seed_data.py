from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.core.context import ActorContext
from modules.customers.dtos import AddressDTO, CreateCustomerDTO
from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.measurements.dtos import MeasurementDTO
from modules.measurements.repositories import MeasurementDjangoRepository
from modules.measurements.services import MeasurementService
from modules.orders.constants import OrderPriority, OrderType
from modules.orders.dtos import CreateOrderDTO
from modules.orders.services import build_order_service
from modules.production.services import build_assignment_service
from modules.staff.dtos import CreateStaffUserDTO
from modules.staff.models import StaffRole, StaffUser
from modules.staff.repositories import StaffDjangoRepository
from modules.staff.services import StaffService
from modules.stores.dtos import CreateStoreDTO
from modules.stores.models import Store
from modules.stores.repositories import StoreDjangoRepository
from modules.stores.services import StoreService
from modules.tailors.constants import SkillLevel
from modules.tailors.dtos import CreateTailorDTO
from modules.tailors.models import Tailor
from modules.tailors.repositories import TailorDjangoRepository
from modules.tailors.services import TailorService

STORES = [
    ("KCH", "Kochi Flagship", "Kochi", "Kerala", "682011"),
    ("TVM", "Trivandrum", "Thiruvananthapuram", "Kerala", "695001"),
]

STAFF = [
    ("admin", StaffRole.ADMIN),
    ("manager", StaffRole.STORE_MANAGER),
    ("sales", StaffRole.SALES_STAFF),
    ("inspector", StaffRole.QUALITY_INSPECTOR),
    ("ravi", StaffRole.TAILOR),
    ("meera", StaffRole.TAILOR),
    ("anil", StaffRole.TAILOR),
]

CUSTOMERS = [
    ("Arjun Menon", "+91 98470 12345", "arjun@example.com", "Kochi"),
    ("Lakshmi Nair", "+91 94460 22334", "lakshmi@example.com", "Kochi"),
    ("Rahul Pillai", "+91 90370 55667", None, "Thiruvananthapuram"),
    ("Divya Varma", "+91 97450 88990", "divya@example.com", "Kochi"),
    ("Suresh Kumar", "+91 99610 44556", None, "Thrissur"),
]

GARMENTS = ["shirt", "kurta", "trousers", "blazer", "sherwani"]


class Command(BaseCommand):
    help = "Seed the database with stores, staff, tailors, customers and orders."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        with transaction.atomic():
            self._seed_login()
            stores = self._seed_stores()
            staff = self._seed_staff(stores[0])
            tailors = self._seed_tailors(staff)
            customers = self._seed_customers()
            orders_created = self._seed_orders(stores, customers, tailors, staff["sales"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"stores={len(stores)}, "
                f"staff={len(staff)}, "
                f"tailors={len(tailors)}, "
                f"customers={len(customers)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_login(self) -> None:
        # Django auth accounts mirror the staff usernames so JWT logins map
        # onto staff profiles.
        User = get_user_model()
        for username, role in STAFF:
            if not User.objects.filter(username=username).exists():
                User.objects.create_user(
                    username,
                    password=f"{username}123",
                    is_staff=role in (StaffRole.ADMIN, StaffRole.STORE_MANAGER),
                    is_superuser=role == StaffRole.ADMIN,
                )

    def _seed_stores(self) -> list[Store]:
        self.stdout.write("Creating stores...")
        service = StoreService(StoreDjangoRepository())
        stores = []
        for code, name, city, state, pin_code in STORES:
            store = Store.objects.filter(code=code).first()
            if store is None:
                store = service.create_store(
                    CreateStoreDTO(
                        code=code,
                        name=name,
                        address_city=city,
                        address_state=state,
                        address_pin_code=pin_code,
                    )
                )
            stores.append(store)
        return stores

    def _seed_staff(self, store: Store) -> dict[str, StaffUser]:
        self.stdout.write("Creating staff...")
        service = StaffService(StaffDjangoRepository())
        staff = {}
        for username, role in STAFF:
            user = StaffUser.objects.filter(username=username).first()
            if user is None:
                user = service.create_user(
                    CreateStaffUserDTO(
                        username=username,
                        email=f"{username}@example.com",
                        role=role,
                        store_id=store.id,
                    )
                )
            staff[username] = user
        return staff

    def _seed_tailors(self, staff: dict[str, StaffUser]) -> list[Tailor]:
        self.stdout.write("Creating tailors...")
        service = TailorService(TailorDjangoRepository(), StaffDjangoRepository())
        profiles = {
            "ravi": (["shirt", "trousers"], SkillLevel.EXPERT, Decimal("450.00")),
            "meera": (["kurta", "blouse"], SkillLevel.ADVANCED, Decimal("380.00")),
            "anil": (["blazer", "sherwani"], SkillLevel.INTERMEDIATE, Decimal("300.00")),
        }
        tailors = []
        for username, (specializations, level, rate) in profiles.items():
            tailor = Tailor.objects.filter(user=staff[username]).first()
            if tailor is None:
                tailor = service.create_tailor(
                    CreateTailorDTO(
                        user_id=staff[username].id,
                        specializations=specializations,
                        skill_level=level,
                        hourly_rate=rate,
                    )
                )
            tailors.append(tailor)
        return tailors

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers_service = CustomerService(CustomerDjangoRepository())
        measurements = MeasurementService(
            MeasurementDjangoRepository(), CustomerDjangoRepository()
        )
        customers = []
        for name, phone, email, city in CUSTOMERS:
            customer = Customer.objects.filter(name=name).first()
            if customer is None:
                customer = customers_service.create_customer(
                    CreateCustomerDTO(
                        name=name,
                        phone=phone,
                        email=email,
                        address=AddressDTO(city=city, state="Kerala"),
                    )
                )
                measurements.record_measurements(
                    str(customer.id),
                    MeasurementDTO(
                        top_fl=Decimal(random.randint(28, 32)),
                        top_sh=Decimal(random.randint(16, 19)),
                        top_sl=Decimal(random.randint(23, 26)),
                        bottom_wr=Decimal(random.randint(30, 38)),
                        bottom_fl=Decimal(random.randint(38, 42)),
                    ),
                )
            customers.append(customer)
        return customers

    def _seed_orders(
        self,
        stores: list[Store],
        customers: list[Customer],
        tailors: list[Tailor],
        sales: StaffUser,
    ) -> int:
        self.stdout.write("Creating orders...")
        if any(customer.order_history for customer in customers):
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        actor = ActorContext(user_id=sales.id, display_name=sales.username)
        orders = build_order_service()
        assignments = build_assignment_service()

        created = 0
        for index, customer in enumerate(customers * 2):
            total = Decimal(random.choice([800, 1200, 2500, 4500]))
            order = orders.create_order(
                CreateOrderDTO(
                    customer_id=customer.id,
                    store_id=random.choice(stores).id,
                    order_type=random.choice(OrderType.values),
                    priority=random.choice(OrderPriority.values),
                    garment_type=random.choice(GARMENTS),
                    total_amount=total,
                    advance_paid=total / 2,
                ),
                actor,
            )
            created += 1
            if index % 3 == 0:
                assignments.assign_order_to_tailor(
                    str(order.id), str(tailors[(index // 3) % len(tailors)].id), actor
                )
        return created
