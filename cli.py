import argparse
import json
import sys

from config.settings import get_settings
from models.results import NotFound, Submitted, ValidationFailed
from services.crm_service import CrmService
from services.forms import CompanyForm, ContactForm
from services.reporting import compute_stats, print_summary
from services.seed import seed_demo
from services.table import company_columns, company_contact_columns, contact_columns, render_table
from storage.document_store import DocumentStore, build_store
from storage.media import FileStorage
from utils.logging_setup import init_logging


COMPANY_FIELDS = ["name", "industry", "location", "website", "revenue", "employees", "notes"]
CONTACT_FIELDS = ["owner_id", "name", "position", "email", "phone", "notes"]


def _store(args):
	settings = get_settings()
	if getattr(args, "data_dir", None):
		return DocumentStore(FileStorage(args.data_dir), key=args.key or settings.storage_key)
	store = build_store(settings)
	if getattr(args, "key", None):
		store.key = args.key
	return store


def _fail(message):
	print(message, file=sys.stderr)
	sys.exit(1)


def _report(result, label):
	if isinstance(result, ValidationFailed):
		_fail(f"Validation Error ({result.field}): {result.reason}")
	if isinstance(result, NotFound):
		_fail(result.reason)
	if isinstance(result, Submitted):
		verb = "created" if result.created else "updated"
		print(f"{label} {verb} successfully (id={result.record.id})")
		return result.record
	return None


def _confirm(args, message):
	if getattr(args, "yes", False):
		return True
	answer = input(f"{message} [y/N] ").strip().lower()
	return answer in ("y", "yes")


def _form_values(args, names):
	# Only flags the user actually passed; argparse leaves the rest as None
	return {n: getattr(args, n) for n in names if getattr(args, n, None) is not None}


def _print_record(record):
	print(json.dumps(record.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))


# --- companies ---

def cmd_companies_list(args):
	service = CrmService(_store(args))
	companies = service.list_companies(args.query or "")
	table = render_table(companies, company_columns(), key=lambda c: c.id)
	print(table.to_text())


def cmd_companies_show(args):
	service = CrmService(_store(args))
	detail = service.get_company_detail(args.id)
	if isinstance(detail, NotFound):
		_fail(detail.reason)
	_print_record(detail.company)
	print()
	print("Contacts:")
	print(render_table(detail.contacts, company_contact_columns(), key=lambda c: c.id).to_text())


def cmd_companies_add(args):
	form = CompanyForm(_store(args))
	form.update(**_form_values(args, COMPANY_FIELDS))
	_report(form.submit(), "Company")


def cmd_companies_edit(args):
	store = _store(args)
	company = CrmService(store).get_company(args.id)
	if isinstance(company, NotFound):
		_fail(company.reason)
	form = CompanyForm(store, company)
	form.update(**_form_values(args, COMPANY_FIELDS))
	_report(form.submit(), "Company")


def cmd_companies_delete(args):
	service = CrmService(_store(args))
	detail = service.get_company_detail(args.id)
	if isinstance(detail, NotFound):
		_fail(detail.reason)
	message = f"Are you sure you want to delete {detail.company.name}?"
	if detail.contacts:
		message += f" {len(detail.contacts)} contact(s) will be removed with it."
	if not _confirm(args, message + " This action cannot be undone."):
		print("Aborted")
		return
	outcome = service.delete_company(args.id)
	print(f"{detail.company.name} has been removed successfully ({outcome.removed_contacts} contact(s) removed).")


# --- contacts ---

def cmd_contacts_list(args):
	store = _store(args)
	service = CrmService(store)
	if args.company:
		contacts = service.list_contacts_for_company(args.company, args.query or "")
	else:
		contacts = [view.contact for view in service.list_contacts(args.query or "")]
	table = render_table(contacts, contact_columns(store.load().companies), key=lambda c: c.id)
	print(table.to_text())


def cmd_contacts_show(args):
	detail = CrmService(_store(args)).get_contact(args.id)
	if isinstance(detail, NotFound):
		_fail(detail.reason)
	_print_record(detail.contact)
	if detail.company is not None:
		print(f"Company: {detail.company.name}")
	else:
		print("Company: Not specified")


def cmd_contacts_add(args):
	form = ContactForm(_store(args))
	form.update(**_form_values(args, CONTACT_FIELDS))
	_report(form.submit(), "Contact")


def cmd_contacts_edit(args):
	store = _store(args)
	detail = CrmService(store).get_contact(args.id)
	if isinstance(detail, NotFound):
		_fail(detail.reason)
	form = ContactForm(store, detail.contact)
	form.update(**_form_values(args, CONTACT_FIELDS))
	_report(form.submit(), "Contact")


def cmd_contacts_delete(args):
	service = CrmService(_store(args))
	detail = service.get_contact(args.id)
	if isinstance(detail, NotFound):
		_fail(detail.reason)
	if not _confirm(args, f"Are you sure you want to delete {detail.contact.name}? This action cannot be undone."):
		print("Aborted")
		return
	service.delete_contact(args.id)
	print(f"{detail.contact.name} has been removed successfully.")


# --- dashboard ---

def cmd_dashboard(args):
	store = _store(args)
	service = CrmService(store, recent_limit=get_settings().recent_limit)
	document = store.load()
	print_summary(compute_stats(document))
	print()
	print("Recent Companies:")
	print(render_table(service.recent_companies(), company_columns()[:3], key=lambda c: c.id).to_text())
	print()
	print("Recent Contacts:")
	recent = [view.contact for view in service.recent_contacts()]
	print(render_table(recent, contact_columns(document.companies)[:4], key=lambda c: c.id).to_text())


def cmd_seed_demo(args):
	if seed_demo(_store(args), force=args.force):
		print("Demo data written")
	else:
		_fail("Store already has companies; use --force to overwrite")


def _add_company_fields(p):
	p.add_argument("--name", help="Company name")
	p.add_argument("--industry")
	p.add_argument("--location")
	p.add_argument("--website")
	p.add_argument("--revenue", help="Annual revenue (free text)")
	p.add_argument("--employees", type=int, help="Number of employees")
	p.add_argument("--notes")


def _add_contact_fields(p):
	p.add_argument("--name", help="Contact name")
	p.add_argument("--owner-id", dest="owner_id", help="Owning company id")
	p.add_argument("--position")
	p.add_argument("--email")
	p.add_argument("--phone")
	p.add_argument("--notes")


def main():
	settings = get_settings()
	init_logging(settings.log_level)
	parser = argparse.ArgumentParser(description="Companies and contacts CRM")
	parser.add_argument("--data-dir", default=None, help="Directory holding the stored document (default from settings)")
	parser.add_argument("--key", default=None, help="Storage entry name (default from settings)")
	sub = parser.add_subparsers(dest="cmd", required=True)

	# Companies
	p_co = sub.add_parser("companies", help="Manage companies")
	co_sub = p_co.add_subparsers(dest="action", required=True)

	p = co_sub.add_parser("list", help="List companies")
	p.add_argument("--query", "-q", default="", help="Case-insensitive search on name, industry, location")
	p.set_defaults(func=cmd_companies_list)

	p = co_sub.add_parser("show", help="Show a company and its contacts")
	p.add_argument("id")
	p.set_defaults(func=cmd_companies_show)

	p = co_sub.add_parser("add", help="Add a company")
	_add_company_fields(p)
	p.set_defaults(func=cmd_companies_add)

	p = co_sub.add_parser("edit", help="Edit a company (only given fields change)")
	p.add_argument("id")
	_add_company_fields(p)
	p.set_defaults(func=cmd_companies_edit)

	p = co_sub.add_parser("delete", help="Delete a company and all of its contacts")
	p.add_argument("id")
	p.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
	p.set_defaults(func=cmd_companies_delete)

	# Contacts
	p_ct = sub.add_parser("contacts", help="Manage contacts")
	ct_sub = p_ct.add_subparsers(dest="action", required=True)

	p = ct_sub.add_parser("list", help="List contacts")
	p.add_argument("--query", "-q", default="", help="Case-insensitive search, including company name")
	p.add_argument("--company", default=None, help="Only contacts of this company id")
	p.set_defaults(func=cmd_contacts_list)

	p = ct_sub.add_parser("show", help="Show a contact")
	p.add_argument("id")
	p.set_defaults(func=cmd_contacts_show)

	p = ct_sub.add_parser("add", help="Add a contact")
	_add_contact_fields(p)
	p.set_defaults(func=cmd_contacts_add)

	p = ct_sub.add_parser("edit", help="Edit a contact (only given fields change)")
	p.add_argument("id")
	_add_contact_fields(p)
	p.set_defaults(func=cmd_contacts_edit)

	p = ct_sub.add_parser("delete", help="Delete a contact")
	p.add_argument("id")
	p.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
	p.set_defaults(func=cmd_contacts_delete)

	p_dash = sub.add_parser("dashboard", help="Show headline stats and recent records")
	p_dash.set_defaults(func=cmd_dashboard)

	p_seed = sub.add_parser("seed-demo", help="Write the demo companies and contacts")
	p_seed.add_argument("--force", action="store_true", help="Overwrite an existing store")
	p_seed.set_defaults(func=cmd_seed_demo)

	args = parser.parse_args()
	args.func(args)


if __name__ == "__main__":
	main()
