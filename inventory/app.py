"""
Flask Inventory Management Application

The application is a web based inventory management system built with Flask

Features include:
    Connecting to a database chosen on a configuration form
    Product management (create, list, filter by name, edit, delete)
    Exporting of the product list to an XLSX file
"""


import os

from flask import Blueprint, Flask, current_app, flash, redirect, render_template, request, url_for
from loguru import logger

from .config import load_config
from .database import ConnectionConfig, DatabaseHandle
from .errors import ConnectionFailedError, ConstraintViolationError, InventoryError, NotConnectedError
from .export import export_products
from .repository import ProductRepository


bp = Blueprint('inventory', __name__)


def create_app(test_config=None, handle=None):
    """
    Create the Flask application

    Args:
        test_config (dict | None): Settings overriding the environment defaults
        handle (DatabaseHandle | None): Connection handle to use instead of a new one

    Returns:
        Flask: The configured application
    """
    app = Flask(__name__, template_folder=os.path.join(os.path.dirname(__file__), "..", "templates"))
    app.config.update(load_config())
    if test_config is not None:
        app.config.update(test_config)

    if handle is None:
        handle = DatabaseHandle(
            driver=app.config['INVENTORY_DB_DRIVER'],
            schema_mode=app.config['INVENTORY_SCHEMA_MODE'],
            connect_timeout=app.config['INVENTORY_CONNECT_TIMEOUT'],
        )
    app.extensions['inventory_db'] = handle

    app.register_blueprint(bp)
    app.register_error_handler(InventoryError, handle_inventory_error)
    return app


def get_repository():
    """
    Returns:
        ProductRepository: Repository on the application's connection handle
    """
    return ProductRepository(current_app.extensions['inventory_db'])


def submitted_fields():
    """
    Form fields, or the JSON body when the request sends one

    Returns:
        Mapping: Submitted values keyed by field name

    Raises:
        ConstraintViolationError: The JSON body is not an object
    """
    if request.is_json:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ConstraintViolationError("Request body must be a JSON object")
        return body
    return request.form


def handle_inventory_error(error):
    """
    Render a page for an inventory error with its HTTP status

    Args:
        error (InventoryError): The raised error

    Returns:
        tuple: Rendered template and status code
    """
    logger.warning(f"{request.method} {request.path} failed: {error.message}")
    if isinstance(error, (ConnectionFailedError, NotConnectedError)):
        return render_template('config.html', error=error.message), error.status_code
    return render_template('error.html', error=error), error.status_code


@bp.route('/')
def config_form():
    """
    Display the database connection form

    Returns:
        str: Rendered config template
    """
    return render_template('config.html')


@bp.route('/connect', methods=['POST'])
def connect():
    """
    Connect to the database from the submitted settings

    The products table is prepared before the response is sent, so a
    successful response means the product pages are usable.

    Returns:
        str | Response: Redirect to the product list, or the config form with the error
    """
    handle = current_app.extensions['inventory_db']
    config = ConnectionConfig.from_form(submitted_fields())
    handle.connect(config)
    flash(f"Connected to {config.database or 'database'}.")
    return redirect(url_for('inventory.products'))


@bp.route('/products', methods=['GET', 'POST'])
def products():
    """
    Show or add products

    GET:
        Render the product list, filtered by the `product_name` query argument
    POST:
        Insert a product from the submitted fields

    Returns:
        str | Response: Rendered template or redirect to the product list
    """
    repository = get_repository()
    if request.method == 'POST':
        try:
            repository.create(submitted_fields())
        except ConstraintViolationError as e:
            logger.warning(f"Product not created: {e.message}")
            flash(e.message)
            return render_template('products.html', products=repository.list(), filter=''), e.status_code
        return redirect(url_for('inventory.products'))

    name_filter = request.args.get('product_name', '')
    return render_template('products.html', products=repository.list(name_filter), filter=name_filter)


@bp.route('/products/<int:product_id>', methods=['GET', 'POST'])
def edit_product(product_id):
    """
    Edit an existing product.

    Args:
        product_id (int): id of the product to edit

    GET:
        Render the edit form with the stored values
    POST:
        Update the product. An unknown id changes nothing

    Returns:
        str | Response: Rendered template or redirect to the product list
    """
    repository = get_repository()
    if request.method == 'POST':
        try:
            repository.update(product_id, submitted_fields())
        except ConstraintViolationError as e:
            logger.warning(f"Product {product_id} not updated: {e.message}")
            flash(e.message)
            return render_template('edit.html', product=repository.get(product_id)), e.status_code
        return redirect(url_for('inventory.products'))

    return render_template('edit.html', product=repository.get(product_id))


@bp.route('/products/<int:product_id>/delete', methods=['POST'])
def delete_product(product_id):
    """
    Delete a product. An unknown id changes nothing

    Args:
        product_id (int): id of the product to delete

    Returns:
        Response: Redirect to the product list
    """
    get_repository().delete(product_id)
    return redirect(url_for('inventory.products'))


@bp.route('/export')
def export():
    """
    Export every product to an XLSX file

    Returns:
         Response: products.xlsx download
    """
    return export_products(get_repository().list())
