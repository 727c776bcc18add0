import os
import unittest
from selenium import webdriver
from selenium.webdriver.common.by import By

BASE_URL = os.environ.get('INVENTORY_BASE_URL', 'http://localhost:3000')


class InventoryBrowserTests(unittest.TestCase):
    """Smoke tests against a running server connected to a scratch database"""
    def setUp(self):
        self.driver = webdriver.Firefox()

    def connect(self):
        driver = self.driver
        driver.get(BASE_URL + '/')
        self.assertIn("Database Configuration", driver.title)
        for name in ('host', 'port', 'username', 'password', 'database'):
            box = driver.find_element(By.NAME, name)
            box.send_keys(os.environ.get(f'INVENTORY_TEST_DB_{name.upper()}', ''))
        driver.find_element(By.TAG_NAME, 'button').click()
        self.assertIn("Products", driver.title)

    def add_item(self, code, name):
        driver = self.driver
        driver.find_element(By.NAME, 'product_code').send_keys(code)
        driver.find_element(By.XPATH, "//form[2]/input[@name='product_name']").send_keys(name)
        driver.find_element(By.NAME, 'qty').send_keys("4")
        driver.find_element(By.NAME, 'price').send_keys("0.99")
        driver.find_element(By.NAME, 'amount').send_keys("3.96")
        driver.find_element(By.XPATH, "//form[2]/button").click()

    def test_add_and_search(self):
        driver = self.driver
        self.connect()
        self.add_item("P1", "Pear")
        self.add_item("A1", "Apple")
        search_box = driver.find_element(By.XPATH, "//form[1]/input[@name='product_name']")
        search_box.send_keys("Pea")
        driver.find_element(By.XPATH, "//form[1]/button").click()
        cells = driver.find_elements(By.XPATH, "//table/tbody/tr/td[2]")
        self.assertEqual([cell.text for cell in cells], ["Pear"])

    def test_edit_item(self):
        driver = self.driver
        self.connect()
        self.add_item("P1", "Pear")
        driver.find_element(By.LINK_TEXT, "Edit").click()
        self.assertIn("Edit Product", driver.title)
        qty_box = driver.find_element(By.NAME, 'qty')
        qty_box.clear()
        qty_box.send_keys("12")
        driver.find_element(By.TAG_NAME, 'button').click()
        self.assertIn("Products", driver.title)
        self.assertEqual(driver.find_element(By.XPATH, "//table/tbody/tr[2]/td[3]").text, "12")

    def test_delete_item(self):
        driver = self.driver
        self.connect()
        self.add_item("P1", "Pear")
        driver.find_element(By.XPATH, "//table//button").click()
        self.assertIn("No products found", driver.page_source)

    def tearDown(self):
        self.driver.close()


if __name__ == "__main__":
    unittest.main()
