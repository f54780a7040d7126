"""
Product Service

Create, list and delete catalog products together with their images.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import NotFound, StoreUnavailable
from storefront.extensions import db
from storefront.models import Product
from storefront.services.uploads import delete_image, save_image

logger = logging.getLogger(__name__)


def list_products():
    try:
        return Product.query.order_by(Product.created_at, Product.id).all()
    except SQLAlchemyError as e:
        logger.exception('Could not list products')
        raise StoreUnavailable() from e


def create_product(name, description, image_file=None):
    name = (name or '').strip()
    description = (description or '').strip()
    if not name or not description:
        raise ValueError('Name and description are required.')

    image = save_image(image_file)
    product = Product(name=name, description=description, image=image)
    try:
        db.session.add(product)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        delete_image(image)
        logger.exception('Could not create product %s', name)
        raise StoreUnavailable() from e
    logger.info('Created product %s', name)
    return product


def delete_product(product_id):
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFound('Product not found')
    image = product.image
    try:
        db.session.delete(product)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Could not delete product %s', product_id)
        raise StoreUnavailable() from e
    # Only remove the file once the row is gone
    delete_image(image)
    logger.info('Deleted product %s', product_id)
