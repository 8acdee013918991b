from __future__ import annotations

from django.core.management.base import BaseCommand

from orders.services.orders import delete_old_unpaid_orders


class Command(BaseCommand):
    help = "Delete unpaid orders that have not been updated within UNPAID_ORDER_TTL_MINUTES."

    def handle(self, *args, **opts):
        count = delete_old_unpaid_orders()
        self.stdout.write(self.style.SUCCESS(f"{count} old unpaid orders deleted"))
