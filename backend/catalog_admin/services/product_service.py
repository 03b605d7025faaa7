import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog_admin.config import settings
from catalog_admin.models.color_variant import ColorVariant
from catalog_admin.models.product import Product
from catalog_admin.models.product_variant import ProductVariant
from catalog_admin.models.variant_type import VariantOption
from catalog_admin.repositories.product_repo import ProductRepository
from catalog_admin.schemas.product_schema import (
    ProductStatus,
    ProductSubmission,
    validate_product_submission,
)
from catalog_admin.utils.combinations import cartesian_product, count_combinations
from catalog_admin.utils.logs import get_logger
from catalog_admin.utils.pricing import derive_price_and_stock
from catalog_admin.utils.sku import SkuKeyGenerator
from catalog_admin.utils.slug import slugify
from catalog_admin.utils.transactions import TransactionTimeout, bounded_transaction

log = get_logger("products", "PRODUCTS")

# concurrent creations of the same name race for one slug; the losers pick the next
SLUG_ATTEMPTS = 5


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    COMBINATORIAL_OVERFLOW = "combinatorial_overflow"
    PERSISTENCE = "persistence"


class ProductServiceException(Exception):
    kind = ErrorKind.PERSISTENCE

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class CombinatorialOverflowError(ProductServiceException):
    kind = ErrorKind.COMBINATORIAL_OVERFLOW

    def __init__(self, combinations: int, limit: int):
        super().__init__(
            f"Product would generate {combinations} variants; the limit is {limit}",
            details={"combinations": combinations, "limit": limit},
        )
        self.combinations = combinations
        self.limit = limit


class ProductRowRejected(Exception):
    """The products INSERT hit a constraint; __cause__ is the IntegrityError."""

    def __init__(self, slug: str):
        super().__init__(f"product row with slug {slug!r} rejected")
        self.slug = slug


class ProductService:
    def __init__(
        self,
        db: Session,
        max_combinations: Optional[int] = None,
        transaction_timeout: Optional[float] = None,
    ):
        self.db = db
        self.repo = ProductRepository(db)
        if max_combinations is None:
            max_combinations = settings.MAX_VARIANT_COMBINATIONS
        if transaction_timeout is None:
            transaction_timeout = settings.TRANSACTION_TIMEOUT_SECONDS
        self.max_combinations = max_combinations
        self.transaction_timeout = transaction_timeout

    def create_product(self, payload: Any) -> Dict:
        """
        Validate a submission and persist the product with every variant
        combination in one transaction.

        payload: dict (or JSON document) shaped like ProductSubmission
        Returns {"success": True, "productId", "variantCount", "message"} or
        {"success": False, "errorKind", "error", "details"}; nothing is written
        unless success is True.

        Not idempotent: the same payload submitted twice creates two products.
        """
        submission, errors = validate_product_submission(payload)
        if errors:
            log.info(f"validation failed fields={sorted(errors)}")
            return self._failure(ErrorKind.VALIDATION, "Validation failed", errors)

        try:
            self.check_combination_limit(submission)
            product_id, variant_count = self.create_from_submission(submission)
        except CombinatorialOverflowError as e:
            log.warning(f"rejected {submission.name!r}: {e}")
            return self._failure(e.kind, str(e), e.details)
        except (SQLAlchemyError, TransactionTimeout) as e:
            log.exception(
                f"creation of {submission.name!r} rolled back: {type(e).__name__}: {e}"
            )
            return self._failure(ErrorKind.PERSISTENCE, "Failed to create product")

        log.info(f"created product id={product_id} variants={variant_count}")
        return {
            "success": True,
            "message": "Product created successfully",
            "productId": product_id,
            "variantCount": variant_count,
        }

    def check_combination_limit(self, submission: ProductSubmission) -> int:
        combos = count_combinations(
            submission.axis_sizes, len(submission.color_variants)
        )
        if combos > self.max_combinations:
            raise CombinatorialOverflowError(combos, self.max_combinations)
        return combos

    def create_from_submission(self, submission: ProductSubmission) -> Tuple[int, int]:
        """
        Write product, axes, options, colors and variants; returns
        (product_id, variant_count). Raises SQLAlchemyError or
        TransactionTimeout after rolling back. When the session already has a
        transaction open the writes go into a SAVEPOINT and committing the
        outer transaction is left to the caller.

        If a concurrent creation commits the chosen slug first, the whole unit
        of work is rolled back and written again under the next free slug, at
        most SLUG_ATTEMPTS times. Any other constraint failure is raised.
        """
        base_slug = slugify(submission.name)
        outer = self.db.in_transaction()
        attempt = 1
        while True:
            try:
                return self._write_submission(submission, base_slug)
            except ProductRowRejected as e:
                if attempt >= SLUG_ATTEMPTS or not self._slug_taken(e.slug, outer):
                    raise e.__cause__
                log.info(f"slug {e.slug!r} taken concurrently, retry {attempt}")
                attempt += 1

    def _slug_taken(self, slug: str, outer: bool) -> bool:
        taken = self.repo.slug_exists(slug)
        if not outer:
            # close the read so the next attempt starts its own transaction
            self.db.rollback()
        return taken

    def _write_submission(
        self, submission: ProductSubmission, base_slug: str
    ) -> Tuple[int, int]:
        now = datetime.now(timezone.utc)
        with bounded_transaction(self.db, self.transaction_timeout) as deadline:
            # 1) product row
            slug = self.repo.next_available_slug(base_slug)
            try:
                product = self.repo.add_product(
                    name=submission.name,
                    slug=slug,
                    description=submission.description,
                    category_id=submission.category_id,
                    subcategory_id=submission.subcategory_id,
                    brand_id=submission.brand_id,
                    base_price=submission.base_price,
                    crossing_price=submission.crossing_price,
                    images=list(submission.images),
                    specifications=submission.specifications_json(),
                    status=submission.status.value,
                    scheduled_at=submission.scheduled_at,
                    published_at=now if submission.status == ProductStatus.PUBLISHED else None,
                )
            except IntegrityError as e:
                raise ProductRowRejected(slug) from e
            deadline.check("product")

            # 2) axes and their options, in declaration order
            axes: List[List[VariantOption]] = []
            for position, vt in enumerate(submission.variant_types):
                _, options = self.repo.add_variant_type(
                    product.id,
                    vt.type_name,
                    position,
                    [
                        {
                            "name": o.name,
                            "price_adjustment": o.price_adjustment,
                            "stock": o.stock,
                        }
                        for o in vt.options
                    ],
                )
                axes.append(options)
            deadline.check("variant types")

            # 3) colors
            colors = self.repo.add_color_variants(
                product.id,
                [
                    {
                        "color_name": c.color_name,
                        "color_code": c.color_code,
                        "images": list(c.images),
                        "stock": c.stock,
                    }
                    for c in submission.color_variants
                ],
            )
            deadline.check("colors")

            # 4) one SKU per combination
            staged = self.stage_variants(product.id, submission.base_price, axes, colors)
            deadline.check("variant staging")
            variant_count = self.repo.add_variants(staged)
            deadline.check("variants")

            product_id = product.id
        return product_id, variant_count

    def stage_variants(
        self,
        product_id: int,
        base_price: Decimal,
        axes: Sequence[Sequence[VariantOption]],
        colors: Sequence[ColorVariant],
    ) -> List[ProductVariant]:
        """
        ProductVariant rows for every option tuple, times every color when the
        product has colors. Tuples come out with the last axis varying fastest
        and colors vary fastest within a tuple.
        """
        keys = SkuKeyGenerator(product_id)
        staged = []
        for combo in cartesian_product(axes):
            for color in colors or [None]:
                price, stock = derive_price_and_stock(base_price, combo, color)
                staged.append(
                    ProductVariant(
                        product_id=product_id,
                        sku=keys.next_key(
                            [o.name for o in combo],
                            color.color_name if color is not None else None,
                        ),
                        variant_option_ids=[o.id for o in combo],
                        color_variant_id=color.id if color is not None else None,
                        final_price=price,
                        stock=stock,
                    )
                )
        return staged

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.repo.get(product_id)

    def _failure(self, kind: ErrorKind, error: str, details: Any = None) -> Dict:
        return {
            "success": False,
            "errorKind": kind.value,
            "error": error,
            "details": details,
        }
