"""Pydantic models describing the payroll year configuration schema.

Percentages are stored exactly as published (``9.3`` means 9.3 %). Amounts are
euro values; assessment ceilings and the wage-tax table are monthly.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

TAX_CLASS_NAMES: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI")
TRADE_GROUP_ORDER: tuple[str, ...] = ("worker", "skilled", "foreman", "master")
CARE_LEVEL_ORDER: tuple[str, ...] = ("assistant", "nurse", "specialist", "lead")
REGION_NAMES: tuple[str, ...] = ("west", "east")


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _require_non_negative(label: str, *values: float) -> None:
    for value in values:
        if value < 0:
            raise ConfigurationError(f"{label} must be non-negative")


def _coerce_float_mapping(value: Any, label: str) -> Mapping[str, float]:
    if isinstance(value, Mapping):
        return {str(key).strip().lower(): float(val) for key, val in value.items()}
    raise ConfigurationError(f"'{label}' must be a mapping")


class WageTaxRow(ImmutableModel):
    """One row of the wage-tax table: an upper gross bound and the tax per column."""

    bound: float
    amounts: Mapping[str, float]

    @model_validator(mode="after")
    def _validate_row(self) -> WageTaxRow:
        if self.bound < 0:
            raise ConfigurationError("Wage-tax row bounds must be non-negative")
        _require_non_negative("Wage-tax amounts", *self.amounts.values())
        return self


class WageTaxTable(ImmutableModel):
    """Monthly wage-tax lookup table keyed by tax-class column.

    A gross is taxed at the amount of the first row whose bound reaches it.
    Bundles may set ``interpolate`` to blend linearly between neighbouring
    rows instead.
    """

    columns: Sequence[str]
    class_columns: Mapping[str, str]
    rows: Sequence[WageTaxRow]
    interpolate: bool = False

    @model_validator(mode="before")
    @classmethod
    def _expand_rows(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise ConfigurationError("'income_tax' section must be a mapping")
        prepared = dict(data)
        columns = prepared.get("columns")
        if not isinstance(columns, Iterable) or isinstance(columns, (str, bytes)):
            raise ConfigurationError("Wage-tax tables must list their 'columns'")
        columns = tuple(str(column) for column in columns)
        prepared["columns"] = columns

        expanded: list[Any] = []
        for row in prepared.get("rows") or ():
            if isinstance(row, Mapping):
                expanded.append(row)
                continue
            values = list(row)
            if len(values) != len(columns) + 1:
                raise ConfigurationError(
                    "Wage-tax rows must contain a bound followed by one amount per column"
                )
            expanded.append(
                {
                    "bound": values[0],
                    "amounts": dict(zip(columns, values[1:])),
                }
            )
        prepared["rows"] = tuple(expanded)
        return prepared

    @field_validator("class_columns", mode="before")
    @classmethod
    def _coerce_class_columns(cls, value: Any) -> Mapping[str, str]:
        if isinstance(value, Mapping):
            return {str(key).strip().upper(): str(val) for key, val in value.items()}
        raise ConfigurationError("'class_columns' must map tax classes to columns")

    @model_validator(mode="after")
    def _validate_table(self) -> WageTaxTable:
        if len(self.rows) < 2:
            raise ConfigurationError("Wage-tax tables require at least two rows")

        missing = [name for name in TAX_CLASS_NAMES if name not in self.class_columns]
        if missing:
            raise ConfigurationError(
                f"Wage-tax table lacks a column mapping for tax class(es): {', '.join(missing)}"
            )
        for tax_class, column in self.class_columns.items():
            if column not in self.columns:
                raise ConfigurationError(
                    f"Tax class {tax_class} maps to unknown column '{column}'"
                )

        previous: WageTaxRow | None = None
        for row in self.rows:
            if set(row.amounts) != set(self.columns):
                raise ConfigurationError("Every wage-tax row must define all columns")
            if previous is not None:
                if row.bound <= previous.bound:
                    raise ConfigurationError("Wage-tax row bounds must be strictly ascending")
                for column in self.columns:
                    if row.amounts[column] < previous.amounts[column]:
                        raise ConfigurationError(
                            f"Wage-tax column '{column}' must not decrease"
                            f" (at bound {row.bound:g})"
                        )
            previous = row
        return self

    def column_for(self, tax_class: str) -> str:
        return self.class_columns[tax_class.upper()]


class TaxAllowances(ImmutableModel):
    """Flat yearly allowances deducted when deriving taxable income."""

    work_expenses: float
    special_expenses: float
    child_allowance: float

    @model_validator(mode="after")
    def _validate_amounts(self) -> TaxAllowances:
        _require_non_negative(
            "Tax allowances", self.work_expenses, self.special_expenses, self.child_allowance
        )
        return self


class SolidarityConfig(ImmutableModel):
    rate: float
    free_threshold: float
    mitigation_rate: float | None = None

    @model_validator(mode="after")
    def _validate_values(self) -> SolidarityConfig:
        _require_non_negative("Solidarity surcharge values", self.rate, self.free_threshold)
        if self.mitigation_rate is not None and self.mitigation_rate <= 0:
            raise ConfigurationError("Solidarity mitigation rate must be positive when set")
        return self


class ChurchTaxConfig(ImmutableModel):
    """Church-tax percentage with per-state overrides."""

    default_rate: float
    state_rates: Mapping[str, float] = Field(default_factory=dict)

    @field_validator("state_rates", mode="before")
    @classmethod
    def _coerce_states(cls, value: Any) -> Mapping[str, float]:
        if value is None:
            return {}
        return _coerce_float_mapping(value, "state_rates")

    @model_validator(mode="after")
    def _validate_rates(self) -> ChurchTaxConfig:
        _require_non_negative("Church tax rates", self.default_rate, *self.state_rates.values())
        return self

    def rate_for_state(self, state: str | None) -> float:
        if state is None:
            return self.default_rate
        return self.state_rates.get(state.strip().lower(), self.default_rate)


class ContributionRates(ImmutableModel):
    """Employee and employer contribution percentages for one insurance branch."""

    employee_rate: float = 0.0
    employer_rate: float = 0.0

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        _require_non_negative("Contribution rates", self.employee_rate, self.employer_rate)
        return self

    @computed_field
    @property
    def total_rate(self) -> float:
        return self.employee_rate + self.employer_rate


class HealthInsuranceRates(ContributionRates):
    average_additional_rate: float = 0.0


class CareInsuranceRates(ContributionRates):
    childless_surcharge: float = 0.0
    childless_exempt_until_age: int = 23


class RegionalCeiling(ImmutableModel):
    """Monthly contribution assessment ceiling for west and east Germany."""

    west: float
    east: float

    @model_validator(mode="after")
    def _validate_ceiling(self) -> RegionalCeiling:
        if self.west <= 0 or self.east <= 0:
            raise ConfigurationError("Assessment ceilings must be positive")
        return self

    def for_region(self, is_east: bool) -> float:
        return self.east if is_east else self.west


class AssessmentCeilings(ImmutableModel):
    pension_unemployment: RegionalCeiling
    health_care: RegionalCeiling


class MinijobConfig(ImmutableModel):
    """Marginal employment: employee pays nothing, employer pays flat rates."""

    monthly_ceiling: float
    employer_health_rate: float
    employer_pension_rate: float
    flat_tax_rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> MinijobConfig:
        if self.monthly_ceiling <= 0:
            raise ConfigurationError("Minijob ceiling must be positive")
        _require_non_negative(
            "Minijob flat rates",
            self.employer_health_rate,
            self.employer_pension_rate,
            self.flat_tax_rate,
        )
        return self

    @computed_field
    @property
    def employer_total_rate(self) -> float:
        return self.employer_health_rate + self.employer_pension_rate + self.flat_tax_rate


class MidijobConfig(ImmutableModel):
    """Transition zone (Übergangsbereich) between minijob and regular employment."""

    upper_bound: float
    factor: float

    @model_validator(mode="after")
    def _validate_values(self) -> MidijobConfig:
        if not 0 < self.factor <= 1:
            raise ConfigurationError("Midijob factor F must lie in (0, 1]")
        return self


class SocialInsuranceConfig(ImmutableModel):
    pension: ContributionRates
    unemployment: ContributionRates
    health: HealthInsuranceRates
    care: CareInsuranceRates
    ceilings: AssessmentCeilings
    minijob: MinijobConfig
    midijob: MidijobConfig

    @model_validator(mode="after")
    def _validate_thresholds(self) -> SocialInsuranceConfig:
        if self.midijob.upper_bound <= self.minijob.monthly_ceiling:
            raise ConfigurationError("Midijob upper bound must exceed the minijob ceiling")
        return self


class ConstructionConfig(ImmutableModel):
    """Construction-industry constants (SOKA-BAU, winter allowance, tariff wages)."""

    soka_employer_rate: float
    vacation_days: int
    vacation_bonus_rate: float
    working_days_per_month: float
    winter_allowance_per_hour: float
    winter_months: Sequence[int]
    hazard_rates: Mapping[str, float]
    tariff_wages: Mapping[str, Mapping[str, float]]

    @field_validator("hazard_rates", mode="before")
    @classmethod
    def _coerce_hazards(cls, value: Any) -> Mapping[str, float]:
        return _coerce_float_mapping(value, "hazard_rates")

    @field_validator("tariff_wages", mode="before")
    @classmethod
    def _coerce_tariffs(cls, value: Any) -> Mapping[str, Mapping[str, float]]:
        if not isinstance(value, Mapping):
            raise ConfigurationError("'tariff_wages' must map regions to trade groups")
        return {
            str(region).strip().lower(): _coerce_float_mapping(groups, "tariff_wages")
            for region, groups in value.items()
        }

    @model_validator(mode="after")
    def _validate_construction(self) -> ConstructionConfig:
        _require_non_negative(
            "Construction rates",
            self.soka_employer_rate,
            self.vacation_bonus_rate,
            self.winter_allowance_per_hour,
            *self.hazard_rates.values(),
        )
        if self.working_days_per_month <= 0:
            raise ConfigurationError("Working days per month must be positive")
        if any(month < 1 or month > 12 for month in self.winter_months):
            raise ConfigurationError("Winter months must be calendar months 1-12")

        for region in REGION_NAMES:
            wages = self.tariff_wages.get(region)
            if wages is None:
                raise ConfigurationError(f"Tariff wages missing for region '{region}'")
            missing = [group for group in TRADE_GROUP_ORDER if group not in wages]
            if missing:
                raise ConfigurationError(
                    f"Tariff wages for '{region}' lack trade group(s): {', '.join(missing)}"
                )
            ordered = [wages[group] for group in TRADE_GROUP_ORDER]
            if any(later <= earlier for earlier, later in zip(ordered, ordered[1:])):
                raise ConfigurationError(
                    f"Tariff wages for '{region}' must increase strictly by trade group"
                )
        for group in TRADE_GROUP_ORDER:
            if self.tariff_wages["west"][group] <= self.tariff_wages["east"][group]:
                raise ConfigurationError(
                    f"West tariff for '{group}' must exceed the east tariff"
                )
        return self


class GastronomyConfig(ImmutableModel):
    meal_values: Mapping[str, float]
    sfn_base_rate_cap: float
    night_rate: float
    deep_night_rate: float
    sunday_rate: float
    holiday_rate: float
    special_holiday_rate: float

    @field_validator("meal_values", mode="before")
    @classmethod
    def _coerce_meals(cls, value: Any) -> Mapping[str, float]:
        return _coerce_float_mapping(value, "meal_values")

    @model_validator(mode="after")
    def _validate_values(self) -> GastronomyConfig:
        missing = {"breakfast", "lunch", "dinner"} - set(self.meal_values)
        if missing:
            raise ConfigurationError(
                f"Meal values missing for: {', '.join(sorted(missing))}"
            )
        _require_non_negative(
            "Gastronomy rates",
            self.sfn_base_rate_cap,
            self.night_rate,
            self.deep_night_rate,
            self.sunday_rate,
            self.holiday_rate,
            self.special_holiday_rate,
            *self.meal_values.values(),
        )
        return self


class NursingConfig(ImmutableModel):
    care_level_rates: Mapping[str, float]
    shift_allowances: Mapping[str, float]
    sfn_base_rate_cap: float
    night_rate: float
    sunday_rate: float
    holiday_rate: float
    christmas_rate: float
    on_call_rate: float
    shift_hours: float

    @field_validator("care_level_rates", "shift_allowances", mode="before")
    @classmethod
    def _coerce_mappings(cls, value: Any) -> Mapping[str, float]:
        return _coerce_float_mapping(value, "nursing rates")

    @model_validator(mode="after")
    def _validate_values(self) -> NursingConfig:
        missing = [level for level in CARE_LEVEL_ORDER if level not in self.care_level_rates]
        if missing:
            raise ConfigurationError(f"Care level rates missing for: {', '.join(missing)}")
        ordered = [self.care_level_rates[level] for level in CARE_LEVEL_ORDER]
        if any(later <= earlier for earlier, later in zip(ordered, ordered[1:])):
            raise ConfigurationError("Care level hourly rates must increase strictly by tier")
        _require_non_negative(
            "Nursing rates",
            self.sfn_base_rate_cap,
            self.night_rate,
            self.sunday_rate,
            self.holiday_rate,
            self.christmas_rate,
            self.on_call_rate,
            *self.shift_allowances.values(),
        )
        if self.shift_hours <= 0:
            raise ConfigurationError("Shift length must be positive")
        return self


class OvertimeConfig(ImmutableModel):
    """Premiums in percent of the hourly rate for overtime and unsocial hours."""

    overtime_rate: float
    night_rate: float
    sunday_rate: float
    holiday_rate: float

    @model_validator(mode="after")
    def _validate_rates(self) -> OvertimeConfig:
        _require_non_negative(
            "Overtime premiums",
            self.overtime_rate,
            self.night_rate,
            self.sunday_rate,
            self.holiday_rate,
        )
        return self


class SickPayConfig(ImmutableModel):
    gross_rate: float
    net_cap_rate: float
    max_weeks: int
    days_per_month: int = 30


class MaternityConfig(ImmutableModel):
    insurance_daily_cap: float
    protection_weeks_before_birth: int
    protection_weeks_after_birth: int
    parental_leave_rate: float
    days_per_month: int = 30


class ShortTimeWorkConfig(ImmutableModel):
    benefit_rate: float
    benefit_rate_with_children: float
    max_months: int
    min_reduction: float


class SpecialPaymentsConfig(ImmutableModel):
    sick_pay: SickPayConfig
    maternity: MaternityConfig
    short_time_work: ShortTimeWorkConfig


class YearConfiguration(ImmutableModel):
    """Structured representation of one payroll year bundle."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    income_tax: WageTaxTable
    allowances: TaxAllowances
    solidarity: SolidarityConfig
    church_tax: ChurchTaxConfig
    social_insurance: SocialInsuranceConfig
    construction: ConstructionConfig
    gastronomy: GastronomyConfig
    overtime: OvertimeConfig
    nursing: NursingConfig
    special_payments: SpecialPaymentsConfig

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")
        return value


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported payroll year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        if not self.years:
            raise ConfigurationError("The configuration manifest must declare at least one year")
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))

    @computed_field
    @property
    def default_year(self) -> int:
        current = [entry.year for entry in self.years if entry.status == "current"]
        if current:
            return max(current)
        return max(self.supported_years)


__all__ = [
    "AssessmentCeilings",
    "CARE_LEVEL_ORDER",
    "CareInsuranceRates",
    "ChurchTaxConfig",
    "ConfigurationError",
    "ConstructionConfig",
    "ContributionRates",
    "GastronomyConfig",
    "HealthInsuranceRates",
    "ImmutableModel",
    "MaternityConfig",
    "MidijobConfig",
    "MinijobConfig",
    "NursingConfig",
    "OvertimeConfig",
    "REGION_NAMES",
    "RegionalCeiling",
    "ShortTimeWorkConfig",
    "SickPayConfig",
    "SocialInsuranceConfig",
    "SolidarityConfig",
    "SpecialPaymentsConfig",
    "TAX_CLASS_NAMES",
    "TRADE_GROUP_ORDER",
    "TaxAllowances",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "WageTaxRow",
    "WageTaxTable",
    "YearConfiguration",
]
