import dataclasses

import pytest

import label4up.config


#============================================
@pytest.mark.parametrize(
	"value, expected",
	[
		("auto", "auto"),
		("Portrait", "portrait"),
		(" landscape ", "landscape"),
		("mpl", "portrait"),
		("GLS", "landscape"),
	],
)
def test_parse_mode(value: str, expected: str) -> None:
	assert label4up.config.parse_mode(value) == expected


#============================================
def test_parse_mode_rejects_unknown() -> None:
	with pytest.raises(ValueError):
		label4up.config.parse_mode("upside-down")


#============================================
def test_default_options() -> None:
	options = label4up.config.ConversionOptions()
	assert options.mode == "auto"
	assert options.white_threshold == 235
	assert options.padding_px == 24
	assert options.region_fraction == 0.75
	assert options.render_scale == 2.0
	assert label4up.config.validate_options(options) is options


#============================================
def test_options_are_frozen() -> None:
	options = label4up.config.ConversionOptions()
	with pytest.raises(dataclasses.FrozenInstanceError):
		options.mode = "portrait"


#============================================
def test_validate_canonicalizes_alias() -> None:
	options = label4up.config.ConversionOptions(mode="MPL")
	assert label4up.config.validate_options(options).mode == "portrait"


#============================================
@pytest.mark.parametrize(
	"field, value",
	[
		("render_scale", 0.0),
		("region_fraction", 0.0),
		("region_fraction", 1.5),
		("white_threshold", -1),
		("white_threshold", 300),
		("padding_px", -4),
	],
)
def test_validate_rejects_bad_values(field: str, value: float) -> None:
	options = dataclasses.replace(label4up.config.ConversionOptions(), **{field: value})
	with pytest.raises(ValueError):
		label4up.config.validate_options(options)
