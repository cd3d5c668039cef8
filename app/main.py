"""
Streamlit Frontend for Expense Tracker

A thin binding over ExpenseTracker: every button calls one tracker
command and renders the CommandResult it gets back.

DESIGN PRINCIPLES:
1. The page holds no expense data of its own
2. Deleting always goes through an explicit yes/no step
3. Every command's messages are shown to the user
"""

from datetime import date

import streamlit as st

from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense, ExpenseCandidate
from expense_tracker.models.feedback import MessageKind, UserMessage, escape_markdown
from expense_tracker.orchestrator import ExpenseTracker, create_app_components
from expense_tracker.store import DELETE_PROMPT


st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💰",
    layout="centered",
)


@st.cache_resource
def get_tracker() -> tuple[ExpenseTracker, list[UserMessage]]:
    """Create and load the tracker once per server process."""
    tracker = create_app_components()
    startup_messages = tracker.start()
    return tracker, startup_messages


def show_messages(messages: list[UserMessage]) -> None:
    for message in messages:
        if message.kind == MessageKind.SUCCESS:
            st.success(message.text)
        elif message.kind == MessageKind.WARNING:
            st.warning(message.text)
        else:
            st.error(message.text)


def main():
    """Main application entry point."""
    tracker, startup_messages = get_tracker()
    categories = get_settings().app.categories_list

    if "pending_delete" not in st.session_state:
        st.session_state.pending_delete = None
    if "flash" not in st.session_state:
        # Load problems are shown once per browser session
        st.session_state.flash = list(startup_messages)

    st.title("💰 Expense Tracker")

    show_messages(st.session_state.flash)
    st.session_state.flash = []

    render_add_form(tracker, categories)
    st.markdown("---")
    render_summary(tracker)
    render_expense_list(tracker, categories)


def render_add_form(tracker: ExpenseTracker, categories: list[str]):
    """Render the add-expense form."""
    st.subheader("Add Expense")

    with st.form("expense_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                "Amount *",
                value=None,
                min_value=0.0,
                step=0.01,
                format="%.2f",
            )
            category = st.selectbox(
                "Category *",
                options=categories,
                index=None,
                placeholder="Select a category",
            )
        with col2:
            description = st.text_input("Description *")
            expense_date = st.date_input("Date *", value=date.today())

        submitted = st.form_submit_button("Add Expense", type="primary")

    if submitted:
        result = tracker.submit_expense(ExpenseCandidate(
            amount=amount,
            category=category,
            description=description,
            expense_date=expense_date,
        ))
        show_messages(result.messages)


def render_summary(tracker: ExpenseTracker):
    """Render the running total and export button."""
    col1, col2 = st.columns([3, 1])
    with col1:
        st.metric("Total Expenses", tracker.format_total())
    with col2:
        st.download_button(
            "Export JSON",
            data=tracker.export_document(),
            file_name=tracker.export_filename(),
            mime="application/json",
        )


def render_expense_list(tracker: ExpenseTracker, categories: list[str]):
    """Render the filtered, date-ordered list with delete buttons."""
    st.subheader("Expenses")

    selected = st.selectbox(
        "Filter by Category",
        options=[None] + categories,
        format_func=lambda x: "All Categories" if x is None else x,
    )
    expenses = tracker.set_filter(selected)

    if not expenses:
        st.info("No expenses recorded yet. Add your first expense above.")
        return

    for expense in expenses:
        render_expense_row(tracker, expense)


def render_expense_row(tracker: ExpenseTracker, expense: Expense):
    col1, col2, col3 = st.columns([2, 4, 1])
    with col1:
        st.markdown(f"**{tracker.format_amount(expense.amount)}**")
    with col2:
        st.markdown(
            f"{escape_markdown(expense.description)}  \n"
            f"*{escape_markdown(expense.category)}* · {expense.expense_date.strftime('%b %d, %Y')}"
        )
    with col3:
        if st.button("Delete", key=f"delete-{expense.id}"):
            st.session_state.pending_delete = expense.id

    if st.session_state.pending_delete == expense.id:
        st.warning(DELETE_PROMPT)
        yes_col, no_col = st.columns(2)
        with yes_col:
            confirmed = st.button("Yes, delete", key=f"confirm-{expense.id}")
        with no_col:
            declined = st.button("Cancel", key=f"cancel-{expense.id}")

        if confirmed or declined:
            result = tracker.request_delete(expense.id, confirm=lambda _prompt: confirmed)
            st.session_state.pending_delete = None
            st.session_state.flash = result.messages
            st.rerun()


if __name__ == "__main__":
    main()
