from gyrofusion.player import (
    AutogeneratedMeshData,
    LimbitlessLocalPlayer,
    PlayerData,
    PlayerMeshData,
)


def test_player_data_defaults():
    data = PlayerData()
    assert data.player_num == -1
    assert (data.player_order, data.tile_pos, data.coins, data.mobius) == (0, 0, 0, 0)
    assert data.player_mesh_data == PlayerMeshData()


def test_player_data_round_trip():
    data = PlayerData()
    data.coins = 12
    data.tile_pos = 7
    data.mobius = 3
    assert (data.coins, data.tile_pos, data.mobius) == (12, 7, 3)


def test_mesh_data_not_shared():
    a, b = PlayerData(), PlayerData()
    a.player_mesh_data.components.hair = "/Game/Hair/Short"
    assert b.player_mesh_data.components.hair is None


def test_autogenerated_mesh_defaults_empty():
    parts = AutogeneratedMeshData()
    assert parts.torso is None and parts.arm_right is None
    assert PlayerMeshData().merged_mesh is None


def test_local_player_starts_without_controller():
    assert LimbitlessLocalPlayer().flex_controller is None


def test_set_flex_controller_notifies_subscribers():
    player = LimbitlessLocalPlayer()
    received = []
    player.subscribe(received.append)
    controller = object()
    player.set_flex_controller(controller)
    assert player.flex_controller is controller
    assert received == [controller]


def test_set_without_subscribers_still_assigns():
    player = LimbitlessLocalPlayer()
    player.set_flex_controller("device")
    assert player.flex_controller == "device"


def test_unsubscribe_stops_notifications():
    player = LimbitlessLocalPlayer()
    received = []
    unsubscribe = player.subscribe(received.append)
    player.set_flex_controller("first")
    unsubscribe()
    player.set_flex_controller("second")
    assert received == ["first"]
    assert player.flex_controller == "second"


def test_multiple_subscribers_in_order():
    player = LimbitlessLocalPlayer()
    calls = []
    player.subscribe(lambda c: calls.append(("a", c)))
    player.subscribe(lambda c: calls.append(("b", c)))
    player.set_flex_controller(None)
    assert calls == [("a", None), ("b", None)]