"""
Geography — Serializers

Read and write serializers for GeoEntity, plus the plain serializers
used by the cascade options endpoint.

@file geography/serializers.py
"""

from rest_framework import serializers

from .models import GeoEntity


class GeoEntityMinimalSerializer(serializers.ModelSerializer):
    """Minimal fields for embedding in other serializers (e.g. service order barangay)."""

    class Meta:
        model = GeoEntity
        fields = ['id', 'name', 'kind']


class GeoEntityReadSerializer(serializers.ModelSerializer):
    """Flat read representation with parent name."""

    parent_name = serializers.CharField(source='parent.name', read_only=True, default=None)
    full_path = serializers.CharField(read_only=True)
    children_count = serializers.SerializerMethodField()

    class Meta:
        model = GeoEntity
        fields = [
            'id', 'name', 'kind',
            'parent', 'parent_name', 'full_path',
            'children_count', 'created_at',
        ]
        read_only_fields = fields

    def get_children_count(self, obj):
        return obj.children.count()


class GeoEntityWriteSerializer(serializers.ModelSerializer):
    # Regions are posted without a parent.
    parent = serializers.PrimaryKeyRelatedField(
        queryset=GeoEntity.objects.all(), required=False, allow_null=True, default=None,
    )

    class Meta:
        model = GeoEntity
        fields = ['name', 'kind', 'parent']

    def validate(self, attrs):
        kind = attrs.get('kind', getattr(self.instance, 'kind', None))
        parent = attrs.get('parent', getattr(self.instance, 'parent', None))

        if kind == GeoEntity.Kind.REGION and parent is not None:
            raise serializers.ValidationError(
                {'parent': 'Region must not have a parent.'},
            )

        if kind != GeoEntity.Kind.REGION and parent is None:
            raise serializers.ValidationError(
                {'parent': f'{kind} requires a parent.'},
            )

        expected_parent_kind = GeoEntity.PARENT_KIND_MAP.get(kind)
        if parent and expected_parent_kind and parent.kind != expected_parent_kind:
            raise serializers.ValidationError(
                {'parent': f'{kind} parent must be a {expected_parent_kind}, got {parent.kind}.'},
            )

        return attrs


class GeoEntityTreeSerializer(serializers.ModelSerializer):
    """Recursive tree representation for hierarchy display."""

    children = serializers.SerializerMethodField()

    class Meta:
        model = GeoEntity
        fields = ['id', 'name', 'kind', 'children']

    def get_children(self, obj):
        depth = self.context.get('depth', 2)
        if depth <= 0:
            return []
        children = obj.children.all().order_by('name')
        return GeoEntityTreeSerializer(
            children, many=True,
            context={'depth': depth - 1},
        ).data


class GeoRecordSerializer(serializers.Serializer):
    """Cascade option record (cascade.hierarchy.GeoEntity)."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    kind = serializers.CharField()
    parent_id = serializers.IntegerField(allow_null=True)


class GeoCascadeQuerySerializer(serializers.Serializer):
    region = serializers.IntegerField(required=False, allow_null=True)
    city = serializers.IntegerField(required=False, allow_null=True)
    barangay = serializers.IntegerField(required=False, allow_null=True)
    location = serializers.IntegerField(required=False, allow_null=True)
