from __future__ import annotations

import math
from dataclasses import dataclass

from models.crm_document import CrmDocument


@dataclass(frozen=True)
class DashboardStats:
    total_companies: int
    total_contacts: int
    avg_employees: int
    contacts_per_company: str


def compute_stats(document: CrmDocument) -> DashboardStats:
    """Headline numbers for the dashboard.

    Average employees rounds half up; contacts per company keeps one decimal.
    Both are zero when there are no companies.
    """
    companies = len(document.companies)
    contacts = len(document.contacts)
    if companies:
        avg = math.floor(sum(c.employees for c in document.companies) / companies + 0.5)
        per_company = f"{contacts / companies:.1f}"
    else:
        avg = 0
        per_company = "0"
    return DashboardStats(
        total_companies=companies,
        total_contacts=contacts,
        avg_employees=avg,
        contacts_per_company=per_company,
    )


def print_summary(stats: DashboardStats) -> None:
    """Print the dashboard summary banner."""
    print("\n" + "="*60)
    print("CRM DASHBOARD - SUMMARY")
    print("="*60)
    print(f"Total Companies: {stats.total_companies}")
    print(f"Total Contacts: {stats.total_contacts}")
    print(f"Avg. Employees: {stats.avg_employees}")
    print(f"Contacts per Company: {stats.contacts_per_company}")
    print("="*60)
