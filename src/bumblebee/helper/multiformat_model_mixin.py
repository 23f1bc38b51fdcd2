from bumblebee.helper.multiformat_deserializable_mixin import MultiformatDeserializableMixin
from bumblebee.helper.multiformat_serializable_mixin import MultiformatSerializableMixin


class MultiformatModelMixin(MultiformatSerializableMixin, MultiformatDeserializableMixin):
    pass
