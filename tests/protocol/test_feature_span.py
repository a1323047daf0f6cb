from meta_version.protocol import Feature, FeatureSpan, Version


class TestFeatureSpan:

    def test_open_ended_span(self):
        span = FeatureSpan(Feature.KV_API, Version(1, 2, 163))

        assert span.until == Version.max()
        assert not span.is_active_at(Version(1, 2, 162))
        assert span.is_active_at(Version(1, 2, 163))
        assert span.is_active_at(Version(2, 0, 0))

    def test_until_is_exclusive(self):
        span = FeatureSpan(Feature.KV_API, Version(1, 2, 163)).with_until(
            Version(1, 2, 287)
        )

        assert span.is_active_at(Version(1, 2, 163))
        assert span.is_active_at(Version(1, 2, 286))
        assert not span.is_active_at(Version(1, 2, 287))
        assert not span.is_active_at(Version(1, 2, 288))

    def test_never_required_span_is_never_active(self):
        span = FeatureSpan(Feature.KV_LIST, Version.max())

        assert not span.is_active_at(Version(260205, 0, 0))
        assert not span.is_active_at(Version.max())

    def test_overlap(self):
        client = FeatureSpan(Feature.WATCH_RESPONSE_IS_INIT, Version(1, 2, 726))
        server = FeatureSpan(Feature.WATCH_RESPONSE_IS_INIT, Version(1, 2, 736))
        retired = FeatureSpan(
            Feature.WATCH_RESPONSE_IS_INIT,
            Version(1, 2, 100),
            Version(1, 2, 726),
        )

        assert client.overlaps(server)
        assert not client.overlaps(retired)

    def test_display(self):
        span = FeatureSpan(Feature.KV_API_GET_KV, Version(1, 2, 163), Version(1, 2, 287))

        assert str(span) == "kv_api/get_kv[1.2.163, 1.2.287)"
        assert str(FeatureSpan(Feature.KV_LIST, Version.max())) == "kv_list[inf, inf)"


class TestFeature:

    def test_declaration_order_is_stable(self):
        features = Feature.all()

        assert features[0] == Feature.KV_API
        assert features[-1] == Feature.KV_GET_MANY
        assert len(features) == 27

    def test_identifiers_are_unique(self):
        names = [feature.value for feature in Feature.all()]

        assert len(names) == len(set(names))

    def test_lookup_by_identifier(self):
        assert Feature.from_name("transaction/reply_error") == Feature.TRANSACTION_REPLY_ERROR
        assert str(Feature.KV_READ_V1) == "kv_read_v1"
