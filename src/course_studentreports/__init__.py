"""Course Student Reports.

Per-course student list with a transient "add students" selection and a
spreadsheet export of grades and attendance. Organized by feature modules
(participants, adduser, reports, ...) with a thin Flask controller layer
over service/repository layers reading the host platform database.
"""
