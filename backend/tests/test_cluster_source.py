from viewer.cluster import ClusterSource, Feature


def _feature(x, y, fid):
    return Feature(coordinate=(x, y), properties={"id": fid})


def test_features_within_distance_merge_into_one_cluster():
    source = ClusterSource(distance=10)
    source.add_features([_feature(0, 0, "a"), _feature(4, 3, "b"), _feature(50, 50, "c")])

    clusters = source.get_clusters(resolution=1.0)

    assert sorted(c.size for c in clusters) == [1, 2]
    pair = next(c for c in clusters if c.size == 2)
    assert pair.coordinate == (2.0, 1.5)
    assert {f.get("id") for f in pair.features} == {"a", "b"}


def test_zooming_in_splits_clusters():
    source = ClusterSource(distance=10)
    source.add_features([_feature(0, 0, "a"), _feature(4, 0, "b")])

    assert len(source.get_clusters(resolution=1.0)) == 1
    assert len(source.get_clusters(resolution=0.1)) == 2


def test_clear_and_add_recompute_clusters():
    source = ClusterSource(distance=10)
    source.add_features([_feature(0, 0, "a")])
    before = source.revision
    assert len(source.get_clusters(1.0)) == 1

    source.clear()
    assert source.get_clusters(1.0) == []
    source.add_features([_feature(0, 0, "x"), _feature(100, 0, "y")])

    assert source.revision == before + 2
    assert len(source.get_clusters(1.0)) == 2


def test_cluster_at_returns_topmost_hit():
    source = ClusterSource(distance=10)
    source.add_features([_feature(0, 0, "bottom"), _feature(15, 0, "top")])

    hit = source.cluster_at((7, 0), resolution=1.0, hit_tolerance_px=10)

    assert hit is not None
    assert hit.features[0].get("id") == "top"


def test_cluster_at_miss_returns_none():
    source = ClusterSource(distance=10)
    source.add_features([_feature(0, 0, "a")])

    assert source.cluster_at((100, 100), resolution=1.0, hit_tolerance_px=10) is None
