"""
Tests for status documents and per-archetype status extraction.
"""

import pytest

from homedeck.capabilities import ARCHETYPES, StatusDocument
from homedeck.capabilities.archetypes import (
    AIR_CONDITIONER,
    CONTACT_SENSOR,
    DIMMER,
    LIGHT,
    LOCK,
    MEDIA,
    MOTION_SENSOR,
    OUTLET,
    SWITCH,
    TEMPERATURE_SENSOR,
    THERMOSTAT,
    HUMIDITY_SENSOR,
)


class TestStatusDocument:

    def test_reads_value_and_unit(self, make_status):
        raw = {
            "components": {
                "main": {
                    "temperatureMeasurement": {
                        "temperature": {"value": 21.5, "unit": "C"}
                    }
                }
            }
        }
        doc = StatusDocument(raw)
        assert doc.value("temperatureMeasurement", "temperature") == 21.5
        assert doc.unit("temperatureMeasurement", "temperature") == "C"
        assert doc.number("temperatureMeasurement", "temperature") == 21.5

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            {},
            {"components": None},
            {"components": {}},
            {"components": {"main": None}},
            {"components": {"main": {"switch": None}}},
            {"components": {"main": {"switch": {"switch": None}}}},
            {"components": {"main": {"switch": {"switch": {}}}}},
            {"components": {"main": {"switch": "on"}}},
            ["not", "a", "mapping"],
        ],
    )
    def test_missing_paths_degrade_to_none(self, raw):
        doc = StatusDocument(raw)
        assert doc.attribute("switch", "switch") is None
        assert doc.value("switch", "switch") is None
        assert doc.flag("switch", "switch", "on") is None
        assert doc.number("switch", "switch") is None
        assert doc.text("switch", "switch") is None

    def test_flag_uses_string_equality_not_truthiness(self, make_status):
        assert StatusDocument(make_status(switch={"switch": "off"})).flag("switch", "switch", "on") is False
        assert StatusDocument(make_status(switch={"switch": True})).flag("switch", "switch", "on") is False
        assert StatusDocument(make_status(switch={"switch": "on"})).flag("switch", "switch", "on") is True

    def test_number_rejects_non_numeric(self, make_status):
        doc = StatusDocument(make_status(switchLevel={"level": "80"}))
        assert doc.number("switchLevel", "level") is None
        doc = StatusDocument(make_status(switchLevel={"level": True}))
        assert doc.number("switchLevel", "level") is None

    def test_other_components(self):
        raw = {"components": {"main": {}, "outlet2": {"switch": {"switch": {"value": "on"}}}}}
        doc = StatusDocument(raw)
        assert doc.component_ids() == ["main", "outlet2"]
        assert doc.flag("switch", "switch", "on") is None
        assert doc.flag("switch", "switch", "on", component="outlet2") is True


class TestExtractors:

    def test_switch(self, make_status):
        assert SWITCH.get_status(make_status(switch={"switch": "on"})).to_dict() == {"is_on": True}
        assert SWITCH.get_status(make_status(switch={"switch": "off"})).to_dict() == {"is_on": False}

    def test_light(self, make_status):
        raw = make_status(
            switch={"switch": "on"},
            switchLevel={"level": 75},
            colorControl={"hue": 30, "saturation": 90},
            colorTemperature={"colorTemperature": 2700},
        )
        assert LIGHT.get_status(raw).to_dict() == {
            "is_on": True,
            "level": 75,
            "hue": 30,
            "saturation": 90,
            "color_temperature": 2700,
        }

    def test_dimmer(self, make_status):
        status = DIMMER.get_status(make_status(switch={"switch": "off"}, switchLevel={"level": 40}))
        assert status.is_on is False
        assert status.level == 40

    def test_outlet(self, make_status):
        raw = make_status(switch={"switch": "on"}, powerMeter={"power": 12.5}, energyMeter={"energy": 3.2})
        status = OUTLET.get_status(raw)
        assert (status.is_on, status.power, status.energy) == (True, 12.5, 3.2)

    def test_air_conditioner(self, make_status):
        raw = make_status(
            switch={"switch": "on"},
            airConditionerMode={"airConditionerMode": "cool"},
            airConditionerFanMode={"fanMode": "auto"},
            fanOscillationMode={"fanOscillationMode": "vertical"},
            thermostatCoolingSetpoint={"coolingSetpoint": 23},
            temperatureMeasurement={"temperature": 26},
        )
        assert AIR_CONDITIONER.get_status(raw).to_dict() == {
            "is_on": True,
            "mode": "cool",
            "fan_mode": "auto",
            "swing_mode": "vertical",
            "cooling_setpoint": 23,
            "temperature": 26,
        }

    def test_media(self, make_status):
        raw = make_status(
            switch={"switch": "on"},
            audioVolume={"volume": 15},
            audioMute={"mute": "unmuted"},
            mediaPlayback={"playbackStatus": "playing"},
        )
        status = MEDIA.get_status(raw)
        assert status.is_on is True
        assert status.volume == 15
        assert status.is_muted is False
        assert status.is_playing is True
        assert status.playback_status == "playing"

    def test_thermostat(self, make_status):
        raw = make_status(
            thermostatMode={"thermostatMode": "heat"},
            thermostatHeatingSetpoint={"heatingSetpoint": 20},
            thermostatCoolingSetpoint={"coolingSetpoint": 25},
            temperatureMeasurement={"temperature": 19.5},
        )
        status = THERMOSTAT.get_status(raw)
        assert status.mode == "heat"
        assert status.heating_setpoint == 20
        assert status.cooling_setpoint == 25
        assert status.temperature == 19.5

    def test_binary_sensors(self, make_status):
        assert LOCK.get_status(make_status(lock={"lock": "locked"})).is_locked is True
        assert LOCK.get_status(make_status(lock={"lock": "unlocked"})).is_locked is False
        assert MOTION_SENSOR.get_status(make_status(motionSensor={"motion": "active"})).motion is True
        assert MOTION_SENSOR.get_status(make_status(motionSensor={"motion": "inactive"})).motion is False
        assert CONTACT_SENSOR.get_status(make_status(contactSensor={"contact": "open"})).is_open is True
        assert CONTACT_SENSOR.get_status(make_status(contactSensor={"contact": "closed"})).is_open is False

    def test_humidity(self, make_status):
        raw = make_status(relativeHumidityMeasurement={"humidity": 45})
        assert HUMIDITY_SENSOR.get_status(raw).humidity == 45

    def test_temperature_unit_defaults_to_celsius(self, make_status):
        status = TEMPERATURE_SENSOR.get_status(make_status(temperatureMeasurement={"temperature": 70}))
        assert status.temperature == 70
        assert status.unit == "C"

        raw = {"components": {"main": {"temperatureMeasurement": {"temperature": {"value": 70, "unit": "F"}}}}}
        assert TEMPERATURE_SENSOR.get_status(raw).unit == "F"

    @pytest.mark.parametrize("archetype", list(ARCHETYPES.values()), ids=lambda a: a.kind.value)
    @pytest.mark.parametrize("raw", [None, {}, {"components": {"main": {}}}, {"components": {"hub": {}}}])
    def test_every_extractor_is_total(self, archetype, raw):
        record = archetype.get_status(raw).to_dict()
        # Nothing is known, so nothing may be reported as False or 0
        assert all(v is None for k, v in record.items() if k != "unit")

    def test_status_records_are_immutable(self, make_status):
        status = SWITCH.get_status(make_status(switch={"switch": "on"}))
        with pytest.raises(AttributeError):
            status.is_on = False
