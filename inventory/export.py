"""
Spreadsheet export of the product list.
"""

import io

from flask import send_file
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter


XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
EXPORT_FILENAME = 'products.xlsx'

# (header, product attribute, column width)
COLUMNS = [
    ("Product Code", "product_code", 15),
    ("Product Name", "product_name", 25),
    ("Quantity", "qty", 10),
    ("Price", "price", 10),
    ("Amount", "amount", 10),
    ("Remark", "remark", 30),
    ("Location", "location", 20),
]
MONEY_FIELDS = ("price", "amount")


def build_workbook(products):
    """
    Write products to a workbook with a single "Products" sheet

    Args:
        products (Iterable[Product]): Rows to export, in order

    Returns:
        Workbook: Header row followed by one row per product
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Products"

    ws.append([header for header, _, _ in COLUMNS])
    header_fill = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)
    for col_num, (_, _, width) in enumerate(COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_num)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
        ws.column_dimensions[get_column_letter(col_num)].width = width

    for product in products:
        ws.append([getattr(product, field) for _, field, _ in COLUMNS])
        for col_num, (_, field, _) in enumerate(COLUMNS, start=1):
            if field in MONEY_FIELDS:
                ws.cell(row=ws.max_row, column=col_num).number_format = '0.00'

    return wb


def export_products(products):
    """
    Stream products as a downloadable XLSX file

    Returns:
         Response: products.xlsx download
    """
    output_xlsx = io.BytesIO()
    build_workbook(products).save(output_xlsx)
    output_xlsx.seek(0)

    return send_file(
        output_xlsx,
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=EXPORT_FILENAME
    )
