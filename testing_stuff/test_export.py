import io
import unittest
from decimal import Decimal

from openpyxl import load_workbook

from inventory.export import build_workbook
from inventory.models import Product


HEADERS = ['Product Code', 'Product Name', 'Quantity', 'Price', 'Amount', 'Remark', 'Location']


def reload(wb):
    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return load_workbook(output)


class ExportTests(unittest.TestCase):
    def setUp(self):
        self.products = [
            Product(product_code='A1', product_name='Widget', qty=10, price=Decimal('2.50'),
                    amount=Decimal('25.00'), remark='Blue', location='Shelf 1'),
            Product(product_code='B2', product_name='Gadget', qty=1, price=Decimal('9.99'),
                    amount=Decimal('9.99'), remark=None, location=None),
        ]

    def test_sheet_layout(self):
        ws = reload(build_workbook(self.products))['Products']
        rows = list(ws.iter_rows(values_only=True))

        self.assertEqual(len(rows), 3)
        self.assertEqual(list(rows[0]), HEADERS)
        self.assertEqual(rows[1], ('A1', 'Widget', 10, 2.5, 25, 'Blue', 'Shelf 1'))
        self.assertEqual(rows[2], ('B2', 'Gadget', 1, 9.99, 9.99, None, None))

    def test_single_products_sheet(self):
        wb = reload(build_workbook([]))
        self.assertEqual(wb.sheetnames, ['Products'])
        self.assertEqual(list(wb['Products'].iter_rows(values_only=True)), [tuple(HEADERS)])

    def test_column_widths(self):
        ws = build_workbook(self.products).active
        widths = [ws.column_dimensions[letter].width for letter in 'ABCDEFG']
        self.assertEqual(widths, [15, 25, 10, 10, 10, 30, 20])


if __name__ == "__main__":
    unittest.main()
