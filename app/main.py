"""
Streamlit Frontend for Finance Tracker

Two areas, picked from the sidebar:
1. Transactions - history plus the income/expense entry flow
2. Admin - create+list panels for categories, employees, contractors

View state lives in st.session_state and is thrown away whenever the
user navigates to the other area; coming back re-reads everything from
the backend.

Gateway failures are written to the diagnostic log only. The form stays
exactly as it was so the user can simply press the button again.
"""

import asyncio

import streamlit as st
import streamlit.components.v1 as components

from fintrack.config import get_settings, validate_all_settings
from fintrack.flows import (
    CategoryManager,
    ContractorManager,
    EmployeeManager,
    EntryView,
    TransactionEntryFlow,
)
from fintrack.host import TELEGRAM_READY_SCRIPT, ReadySignal
from fintrack.models import ContractorKind, EntryKind, format_amount
from fintrack.orchestrator import (
    create_admin_managers,
    create_app_components,
    create_entry_flow,
)


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="centered",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .income { color: #16a34a; font-weight: bold; }
    .expense { color: #dc2626; font-weight: bold; }
</style>
""", unsafe_allow_html=True)


TRANSACTIONS_PAGE = "💸 Transactions"
ADMIN_PAGE = "⚙️ Admin"

KIND_LABELS = {
    EntryKind.INCOME: "Income",
    EntryKind.EXPENSE: "Expense",
}
CONTRACTOR_LABELS = {
    ContractorKind.CLIENT: "Client",
    ContractorKind.SUPPLIER: "Supplier",
}


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create the process-wide components (cached)."""
    return create_app_components(use_storage=True)


@st.cache_resource
def get_ready_signal() -> ReadySignal:
    """One signal per process, so the host hears ready() once."""
    _, diagnostics, _ = get_components()
    notify = None
    if get_settings().app.host_ready_signal:
        def notify():
            components.html(TELEGRAM_READY_SCRIPT, height=0)
    return ReadySignal(notify=notify, diagnostics=diagnostics)


def bump_nonce(name: str) -> None:
    """Give a form's widgets fresh keys so they render from the reset draft."""
    st.session_state[name] = st.session_state.get(name, 0) + 1


def widget_key(name: str, field: str) -> str:
    return f"{name}_{st.session_state.get(name, 0)}_{field}"


def main():
    """Main application entry point."""
    gateway, diagnostics, _ = get_components()
    get_ready_signal().fire()

    st.sidebar.title("💰 Finance Tracker")
    page = st.sidebar.radio(
        "Navigate to:",
        [TRANSACTIONS_PAGE, ADMIN_PAGE],
        index=0,
    )

    # Navigating away discards the other area's view state
    if st.session_state.get("active_page") != page:
        st.session_state.active_page = page
        st.session_state.pop("entry_flow", None)
        st.session_state.pop("admin_managers", None)

    if page == TRANSACTIONS_PAGE:
        if "entry_flow" not in st.session_state:
            flow = create_entry_flow(gateway, diagnostics)
            run_async(flow.load())
            st.session_state.entry_flow = flow
        render_entry_page(st.session_state.entry_flow)
    else:
        if "admin_managers" not in st.session_state:
            managers = create_admin_managers(gateway, diagnostics)
            for manager in managers.values():
                run_async(manager.load())
            st.session_state.admin_managers = managers
        render_admin_page(st.session_state.admin_managers)


# =============================================================================
# TRANSACTIONS
# =============================================================================

def render_entry_page(flow: TransactionEntryFlow):
    st.title("Finance Tracker")
    if flow.view == EntryView.MAIN:
        render_main_view(flow)
    else:
        render_category_view(flow)


def render_main_view(flow: TransactionEntryFlow):
    currency = get_settings().app.currency_symbol

    if st.button("➕ Income", type="primary"):
        flow.choose_kind(EntryKind.INCOME)
        st.rerun()
    if st.button("➖ Expense"):
        flow.choose_kind(EntryKind.EXPENSE)
        st.rerun()

    if not flow.transactions:
        return

    totals = flow.totals()
    col1, col2, col3 = st.columns(3)
    col1.metric("Income", f"{format_amount(totals.income)} {currency}")
    col2.metric("Expense", f"{format_amount(totals.expense)} {currency}")
    col3.metric("Balance", f"{format_amount(totals.balance)} {currency}")

    st.subheader("History")
    for transaction in flow.transactions:
        css = "income" if transaction.kind == EntryKind.INCOME else "expense"
        left, right = st.columns([3, 1])
        with left:
            st.markdown(f"**{transaction.category_name}**")
            if transaction.description:
                st.caption(transaction.description)
        with right:
            st.markdown(
                f'<span class="{css}">{transaction.display_amount(currency)}</span>',
                unsafe_allow_html=True,
            )


def render_category_view(flow: TransactionEntryFlow):
    st.subheader(f"{KIND_LABELS[flow.kind]}: choose a category")

    categories = flow.visible_categories
    columns = st.columns(2)
    for index, category in enumerate(categories):
        selected = category.id == flow.selected_category_id
        with columns[index % 2]:
            if st.button(
                category.name,
                key=f"category_{category.id}",
                type="primary" if selected else "secondary",
            ):
                flow.select_category(category.id)
                st.rerun()

    if flow.details_visible:
        render_detail_entry(flow)

    if st.button("Back"):
        flow.back()
        bump_nonce("entry")
        st.rerun()


def render_detail_entry(flow: TransactionEntryFlow):
    flow.set_amount(st.text_input(
        "Amount",
        value=flow.amount,
        placeholder="Enter amount",
        key=widget_key("entry", "amount"),
    ))
    if flow.amount_error:
        st.error(f"Please enter a valid amount ({flow.amount_error}).")
    flow.set_description(st.text_input(
        "Description",
        value=flow.description,
        placeholder="Enter description",
        key=widget_key("entry", "description"),
    ))

    if flow.employees:
        employee = st.selectbox(
            "Employee (optional)",
            options=[None] + flow.employees,
            format_func=lambda e: "None" if e is None else e.name,
            key=widget_key("entry", "employee"),
        )
        flow.set_employee(employee.id if employee else None)

    if flow.contractors:
        contractor = st.selectbox(
            "Contractor (optional)",
            options=[None] + flow.contractors,
            format_func=lambda c: "None" if c is None else c.name,
            key=widget_key("entry", "contractor"),
        )
        flow.set_contractor(contractor.id if contractor else None)

    label = f"Add {KIND_LABELS[flow.kind].lower()}"
    if st.button(label, type="primary", disabled=not flow.can_submit):
        if run_async(flow.submit()):
            bump_nonce("entry")
            st.rerun()


# =============================================================================
# ADMIN
# =============================================================================

def render_admin_page(managers: dict):
    st.title("Admin")

    tab_categories, tab_employees, tab_contractors = st.tabs(
        ["Categories", "Employees", "Contractors"]
    )
    with tab_categories:
        render_categories(managers["categories"])
    with tab_employees:
        render_employees(managers["employees"])
    with tab_contractors:
        render_contractors(managers["contractors"])

    with st.expander("Connection status"):
        status = validate_all_settings()
        for name, key in [("Google Sheets (Storage)", "google_sheets"), ("App", "app")]:
            if status.get(key, False):
                st.success(f"✅ {name} - Configured")
            else:
                st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")


def submit_manager(manager, nonce: str) -> None:
    if run_async(manager.submit()):
        bump_nonce(nonce)
        st.rerun()


def render_record_list(manager, heading: str) -> None:
    st.markdown(f"#### {heading}")
    for record in manager.records:
        st.markdown(f"**{record.name}**")
        for line in manager.describe(record):
            st.caption(line)


def render_categories(manager: CategoryManager):
    nonce = "categories"
    draft = manager.draft

    manager.update_draft("name", st.text_input(
        "Name", value=draft.name, key=widget_key(nonce, "name"),
    ))

    kinds = [EntryKind.EXPENSE, EntryKind.INCOME]
    manager.update_draft("kind", st.selectbox(
        "Type",
        options=kinds,
        index=kinds.index(manager.draft.kind),
        format_func=lambda k: KIND_LABELS[k],
        key=widget_key(nonce, "kind"),
    ))

    if manager.shows_fixed_flag:
        manager.update_draft("is_fixed", st.checkbox(
            "Fixed expense",
            value=manager.draft.is_fixed,
            key=widget_key(nonce, "is_fixed"),
        ))

    # Keyed by kind: switching kind swaps the whole option list
    parent = st.selectbox(
        "Parent category (optional)",
        options=manager.parent_options,
        format_func=lambda option: option.label,
        key=widget_key(nonce, f"parent_{manager.draft.kind.value}"),
    )
    manager.update_draft("parent_id", parent.id)

    if st.button("Add category", type="primary", disabled=manager.submitting):
        submit_manager(manager, nonce)

    render_record_list(manager, "Existing categories")


def render_employees(manager: EmployeeManager):
    nonce = "employees"
    draft = manager.draft

    for field, label in [("name", "Full name"), ("department", "Department"), ("position", "Position")]:
        manager.update_draft(field, st.text_input(
            label, value=getattr(draft, field), key=widget_key(nonce, field),
        ))

    if st.button("Add employee", type="primary", disabled=manager.submitting):
        submit_manager(manager, nonce)

    render_record_list(manager, "Employees")


def render_contractors(manager: ContractorManager):
    nonce = "contractors"
    draft = manager.draft

    manager.update_draft("name", st.text_input(
        "Name", value=draft.name, key=widget_key(nonce, "name"),
    ))

    kinds = list(ContractorKind)
    manager.update_draft("kind", st.selectbox(
        "Type",
        options=kinds,
        index=kinds.index(draft.kind),
        format_func=lambda k: CONTRACTOR_LABELS[k],
        key=widget_key(nonce, "kind"),
    ))

    manager.update_draft("contact_person", st.text_input(
        "Contact person", value=draft.contact_person, key=widget_key(nonce, "contact_person"),
    ))
    manager.update_draft("contact_email", st.text_input(
        "Email", value=draft.contact_email, key=widget_key(nonce, "contact_email"),
    ))

    if st.button("Add contractor", type="primary", disabled=manager.submitting):
        submit_manager(manager, nonce)

    render_record_list(manager, "Contractors")


if __name__ == "__main__":
    main()
