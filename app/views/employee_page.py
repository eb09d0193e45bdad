"""
HTML rendering for the employee page.

Builds the form, the employee table and the delete confirmation as plain
HTML strings. All user-controlled values go through html.escape.
"""

from html import escape
from typing import List, Optional

from app.schemas.employee import Employee, Gender
from app.services.employee_controller import EmployeeController


def render_employee_page(controller: EmployeeController, title: str = "Employee Manager") -> str:
    """
    Render the full page: status messages, form and table.

    Args:
        controller: Controller holding the current view
        title: Page title

    Returns:
        str: HTML document
    """
    if controller.state.is_loading:
        return _document(title, "<div>Loading...</div>")

    heading = "Edit Employee" if controller.baseline else "Add New Employee"

    body = f"""
    <h2>{heading}</h2>
    {_render_messages(controller)}
    {_render_form(controller)}
    <h2>Employee List</h2>
    {_render_table(controller.employees)}
"""
    return _document(title, body)


def render_delete_confirmation(employee: Employee, prompt: str, title: str = "Employee Manager") -> str:
    body = f"""
    <h2>Delete Employee</h2>
    <p>{escape(prompt)}</p>
    <form method="post" action="/employees/{employee.id}/delete">
        <button type="submit" name="confirm" value="yes">Delete</button>
        <button type="submit" name="confirm" value="no">Cancel</button>
    </form>
"""
    return _document(title, body)


def _document(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{escape(title)}</title>
</head>
<body>
{body}
</body>
</html>
"""


def _render_messages(controller: EmployeeController) -> str:
    parts = []
    if controller.state.error:
        parts.append(f'<div class="error" style="color: red;">{escape(controller.state.error)}</div>')
    if controller.notice:
        parts.append(f'<div class="notice">{escape(controller.notice)}</div>')
    if controller.changes:
        items = "".join(f"<li>{escape(change)}</li>" for change in controller.changes)
        parts.append(f'<ul class="changes">{items}</ul>')
    return "\n    ".join(parts)


def _render_form(controller: EmployeeController) -> str:
    form = controller.form
    selected_id = form.gender.id if form.gender else None

    create_disabled = "" if controller.can_create else " disabled"
    update_disabled = "" if controller.can_update else " disabled"
    create_label = "Adding..." if controller.state.is_submitting else "Add Employee"
    update_label = "Updating..." if controller.state.is_updating else "Update Employee"

    return f"""<form method="post" action="/employees">
        <label>Name: <input type="text" name="name" value="{escape(form.name)}" required></label>
        <label>NIC: <input type="text" name="nic" value="{escape(form.nic)}" required></label>
        <label>Email: <input type="email" name="email" value="{escape(form.email)}" required></label>
        <label>Gender:
            <select name="gender" required>
                {_render_gender_options(controller.genders, selected_id)}
            </select>
        </label>
        <button type="submit" name="action" value="create"{create_disabled}>{create_label}</button>
        <button type="submit" name="action" value="update"{update_disabled}>{update_label}</button>
        <button type="submit" name="action" value="clear" formnovalidate>Clear</button>
    </form>"""


def _render_gender_options(genders: List[Gender], selected_id: Optional[int]) -> str:
    options = ['<option value="">Select Gender</option>']
    for gender in genders:
        selected = " selected" if gender.id == selected_id else ""
        options.append(f'<option value="{gender.id}"{selected}>{escape(gender.name)}</option>')
    return "\n                ".join(options)


def _render_table(employees: List[Employee]) -> str:
    rows = []
    for employee in employees:
        gender_name = employee.gender.name if employee.gender else ""
        rows.append(f"""<tr>
            <td>{employee.id}</td>
            <td>{escape(employee.name)}</td>
            <td>{escape(employee.nic)}</td>
            <td>{escape(employee.email)}</td>
            <td>{escape(gender_name)}</td>
            <td>
                <form method="post" action="/employees/{employee.id}/edit" style="display: inline;">
                    <button type="submit">Edit</button>
                </form>
                <a href="/employees/{employee.id}/delete">Delete</a>
            </td>
        </tr>""")

    rows_html = "".join(rows)
    return f"""<table border="1" cellpadding="8">
        <thead>
        <tr>
            <th>ID</th>
            <th>Name</th>
            <th>NIC</th>
            <th>Email</th>
            <th>Gender</th>
            <th>Actions</th>
        </tr>
        </thead>
        <tbody>
        {rows_html}
        </tbody>
    </table>"""
