"""Class attributes a host model declares to describe itself.

Example model in the host application:

    class User(Base, SoftDeleteMixin):
        __tablename__ = "users"
        __fillable__ = ["name", "email", "password"]
        __unique__ = ["email"]
        __rules__ = {"email": "required|email|max:255"}
"""

FILLABLE_ATTR = "__fillable__"
UNIQUE_ATTR = "__unique__"
RULES_ATTR = "__rules__"
TABLE_ATTR = "__tablename__"
SOFT_DELETE_ATTR = "__soft_delete__"

MODEL_ATTRS = (FILLABLE_ATTR, UNIQUE_ATTR, RULES_ATTR, TABLE_ATTR, SOFT_DELETE_ATTR)
