"""Settings routes: profile and category management."""

from __future__ import annotations

from flask import flash, g, redirect, render_template, request, url_for
from werkzeug.exceptions import NotFound

from ...constants import CURRENCIES, KINDS
from ...errors import CategoryKindMismatch, GatewayError, NotFoundError
from ...logging_config import get_logger
from ...models.category import Category
from ...services.ledger_service import check_category_rekind
from ...web import abandon, app_config, current_gateway, current_user_id
from . import bp
from .forms import CategoryForm, ProfileForm

logger = get_logger(__name__)


def _render_index(profile_form: ProfileForm | None = None):
    gateway = current_gateway()
    user_id = current_user_id()
    try:
        profile = gateway.profiles.get(user_id=user_id)
    except GatewayError:
        logger.exception("Failed to load profile")
        profile = None
    try:
        categories = gateway.categories.list_all(user_id=user_id)
    except GatewayError:
        logger.exception("Failed to load categories")
        categories = []

    if profile_form is None:
        profile_form = ProfileForm(
            full_name=profile.full_name if profile else "",
            currency=profile.currency if profile else app_config().DEFAULT_CURRENCY,
        )
    return render_template(
        "settings/index.html",
        profile_form=profile_form,
        email=(profile.email if profile and profile.email else g.identity.email),
        currencies=CURRENCIES,
        categories=categories,
    )


def _render_category_form(form: CategoryForm, category_id: str | None):
    if category_id:
        action = url_for("settings.update_category", category_id=category_id)
    else:
        action = url_for("settings.create_category")
    return render_template(
        "settings/category_form.html",
        form=form,
        kinds=KINDS,
        form_action=action,
        is_edit=category_id is not None,
    )


@bp.get("/")
def index():
    return _render_index()


@bp.post("/profile")
def update_profile():
    form = ProfileForm.from_mapping(request.form)
    if not form.validate():
        return _render_index(form), 400
    try:
        current_gateway().profiles.update(form.changes(), user_id=current_user_id())
    except GatewayError:
        return abandon("update profile", "settings.index")

    flash("Profile saved.", "success")
    return redirect(url_for("settings.index"))


@bp.get("/categories/new")
def new_category():
    return _render_category_form(CategoryForm(), None)


@bp.post("/categories")
def create_category():
    form = CategoryForm.from_mapping(request.form)
    if not form.validate():
        return _render_category_form(form, None), 400
    try:
        user_id = current_user_id()
        current_gateway().categories.create(
            Category(user_id=user_id, **form.changes()), user_id=user_id
        )
    except GatewayError:
        return abandon("create category", "settings.index")

    flash("Category added.", "success")
    return redirect(url_for("settings.index"))


@bp.get("/categories/<category_id>/edit")
def edit_category(category_id: str):
    try:
        category = current_gateway().categories.get_by_id(category_id, user_id=current_user_id())
    except NotFoundError:
        category = None
    except GatewayError:
        return abandon("load category", "settings.index")
    if category is None:
        raise NotFound(f"Category {category_id} was not found")
    return _render_category_form(CategoryForm.from_category(category), category_id)


@bp.post("/categories/<category_id>")
def update_category(category_id: str):
    form = CategoryForm.from_mapping(request.form)
    if not form.validate():
        return _render_category_form(form, category_id), 400
    gateway = current_gateway()
    user_id = current_user_id()
    try:
        if app_config().ENFORCE_CATEGORY_KIND:
            try:
                category = gateway.categories.get_by_id(category_id, user_id=user_id)
            except NotFoundError:
                category = None
            if category is None:
                raise NotFound(f"Category {category_id} was not found")
            check_category_rekind(gateway, user_id=user_id, category=category, kind=form.kind)
        gateway.categories.update(category_id, form.changes(), user_id=user_id)
    except CategoryKindMismatch as exc:
        form.errors.setdefault("kind", []).append(str(exc))
        return _render_category_form(form, category_id), 400
    except GatewayError:
        return abandon("update category", "settings.index")

    flash("Category updated.", "success")
    return redirect(url_for("settings.index"))


@bp.post("/categories/<category_id>/delete")
def delete_category(category_id: str):
    try:
        current_gateway().categories.delete(category_id, user_id=current_user_id())
    except GatewayError:
        return abandon("delete category", "settings.index")

    logger.info("Category deleted", extra={"category_id": category_id})
    flash("Category deleted.", "success")
    return redirect(url_for("settings.index"))
